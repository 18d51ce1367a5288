"""
datamesh/services/ingestion_service.py

Service layer tying parsing, validation, analysis, and merging together.

Each operation is a pure function of its inputs. ``parse_many`` isolates
failures per file: a file that cannot be parsed is logged and reported in
the batch result while the remaining files continue.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Iterable, Mapping, Sequence, Tuple, Union

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.analysis.structure_analyzer import StructureAnalyzer
from datamesh.analysis.type_inferencer import TypeInferencer
from datamesh.config import AnalysisSettings, get_analysis_settings
from datamesh.domain.ingestion import BatchParseResult, ParseFailure
from datamesh.domain.quality import QualityReport, ValidationResult
from datamesh.domain.structure import MergedData, MergeSuggestion, ProcessedData, Structure
from datamesh.domain.tabular import Metadata, ParsedFile
from datamesh.logging_utils import log_event
from datamesh.parsing.csv_parser import CSVParser, ParseError
from datamesh.services.merger import DataMerger
from datamesh.services.processor import DataProcessor
from datamesh.validators.dataset_validator import DataValidator

logger = logging.getLogger(__name__)

FileContent = Union[str, bytes]
FileSources = Union[Mapping[str, FileContent], Iterable[Tuple[str, FileContent]]]

_ParseOutcome = Tuple[Union[ParsedFile, None], Union[ParseFailure, None]]


class DatasetIngestionService:
    """
    Public entry point for the tabular analysis core.
    """

    def __init__(
        self,
        *,
        settings: AnalysisSettings | None = None,
        parser: CSVParser | None = None,
        validator: DataValidator | None = None,
        analyzer: StructureAnalyzer | None = None,
        merger: DataMerger | None = None,
    ) -> None:
        self._settings = settings or AnalysisSettings()
        inferencer = TypeInferencer(date_ratio_threshold=self._settings.date_ratio_threshold)
        self._extractor = MetadataExtractor(inferencer=inferencer)
        self._parser = parser or CSVParser(
            extractor=self._extractor,
            sample_size=self._settings.sample_size,
        )
        self._validator = validator or DataValidator(
            low_completeness_threshold=self._settings.low_completeness_threshold,
            small_dataset_rows=self._settings.small_dataset_rows,
        )
        self._analyzer = analyzer or StructureAnalyzer(
            key_confidence=self._settings.key_confidence,
            temporal_confidence=self._settings.temporal_confidence,
            similarity_threshold=self._settings.similarity_threshold,
            containment_similarity=self._settings.containment_similarity,
        )
        self._merger = merger or DataMerger(inferencer=inferencer)
        self._processor = DataProcessor(
            analyzer=self._analyzer,
            merger=self._merger,
            extractor=self._extractor,
        )

    @property
    def processor(self) -> DataProcessor:
        return self._processor

    def parse_file(self, name: str, content: FileContent) -> ParsedFile:
        """
        Parse one file.

        Raises:
            ParseError: For empty or undecodable input.
        """

        return self._parser.parse(content, name)

    def validate(self, parsed_file: ParsedFile) -> ValidationResult:
        return self._validator.validate(parsed_file)

    def check_quality(self, parsed_file: ParsedFile) -> QualityReport:
        return self._validator.check_quality(parsed_file)

    def extract_all(self, files: Sequence[ParsedFile]) -> list[Metadata]:
        return self._extractor.extract_all(files)

    def analyze_structure(self, metadatas: Sequence[Metadata]) -> Structure:
        structure = self._analyzer.analyze(metadatas)
        log_event(
            logger,
            logging.INFO,
            "structure_analyzed",
            files=[metadata.file_name for metadata in structure.tables],
            relations=len(structure.relations),
            overlaps=len(structure.overlaps),
            strategy=structure.suggested_merge.strategy if structure.suggested_merge else None,
        )
        return structure

    def merge_files(
        self,
        files: Sequence[ParsedFile],
        strategy: str | MergeSuggestion,
    ) -> MergedData:
        merged = self._merger.merge(files, strategy)
        log_event(
            logger,
            logging.INFO,
            "files_merged",
            files=list(merged.source_files),
            strategy=merged.strategy,
            rows=len(merged.rows),
        )
        return merged

    def process(self, files: Sequence[ParsedFile]) -> ProcessedData:
        return self._processor.process(files)

    def parse_many(self, sources: FileSources) -> BatchParseResult:
        """
        Parse several files, isolating failures per file.

        Large batches run on a thread pool; results keep the input order
        and each file's rows keep their source order.
        """

        items = list(sources.items()) if isinstance(sources, Mapping) else list(sources)

        if self._should_parallelize(len(items)):
            with ThreadPoolExecutor(max_workers=self._settings.max_workers) as executor:
                outcomes = list(executor.map(self._parse_one, items))
        else:
            outcomes = [self._parse_one(item) for item in items]

        result = BatchParseResult()
        for parsed_file, failure in outcomes:
            if parsed_file is not None:
                result.files.append(parsed_file)
            if failure is not None:
                result.failures.append(failure)

        log_event(
            logger,
            logging.INFO,
            "batch_parsed",
            files_total=len(items),
            files_parsed=len(result.files),
            files_failed=len(result.failures),
            status=result.status,
        )
        return result

    def _should_parallelize(self, count: int) -> bool:
        return (
            self._settings.parallel_parse_enabled
            and self._settings.max_workers > 1
            and count >= self._settings.parallel_parse_threshold
        )

    def _parse_one(self, item: Tuple[str, FileContent]) -> _ParseOutcome:
        name, content = item
        try:
            parsed_file = self._parser.parse(content, name)
        except ParseError as exc:
            log_event(
                logger,
                logging.WARNING,
                "file_parse_failed",
                file_name=name,
                code=exc.code,
                error=exc.message,
            )
            return None, ParseFailure(file_name=name, code=exc.code, message=exc.message)

        log_event(
            logger,
            logging.DEBUG,
            "file_parsed",
            file_name=name,
            rows=parsed_file.metadata.row_count,
            columns=len(parsed_file.columns),
            delimiter=parsed_file.delimiter,
        )
        return parsed_file, None


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_ingestion_service() -> DatasetIngestionService:
    """
    Build and cache the service with env-driven settings.
    """

    return DatasetIngestionService(settings=get_analysis_settings())
