"""
datamesh/services/processor.py

Multi-file processing: structure analysis, automatic merge, and group-by
aggregation over the processed result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.analysis.structure_analyzer import StructureAnalyzer
from datamesh.domain.structure import MergedData, ProcessedData
from datamesh.domain.tabular import ParsedFile
from datamesh.logging_utils import log_event
from datamesh.services.merger import DataMerger

logger = logging.getLogger(__name__)


class AggregationOp:
    SUM = "sum"
    AVG = "avg"
    COUNT = "count"
    MIN = "min"
    MAX = "max"


ALLOWED_AGGREGATION_OPS = {
    AggregationOp.SUM,
    AggregationOp.AVG,
    AggregationOp.COUNT,
    AggregationOp.MIN,
    AggregationOp.MAX,
}


class ProcessingError(ValueError):
    """
    Raised when processing is requested with unusable arguments.
    """


@dataclass(frozen=True)
class Aggregation:
    column: str
    operation: str

    @property
    def output_key(self) -> str:
        return f"{self.column}_{self.operation}"


class DataProcessor:
    """
    Analyzes a set of parsed files and merges them when a strategy applies.
    """

    def __init__(
        self,
        *,
        analyzer: StructureAnalyzer | None = None,
        merger: DataMerger | None = None,
        extractor: MetadataExtractor | None = None,
    ) -> None:
        self._analyzer = analyzer or StructureAnalyzer()
        self._merger = merger or DataMerger()
        self._extractor = extractor or MetadataExtractor()

    def process(self, files: Sequence[ParsedFile]) -> ProcessedData:
        """
        Analyze ``files`` and build the suggested merge when there is one.

        Raises:
            ProcessingError: If ``files`` is empty.
        """

        if not files:
            raise ProcessingError("No parsed files provided.")

        structure = self._analyzer.analyze(self._extractor.extract_all(files))

        merged: MergedData | None = None
        if len(files) > 1 and structure.suggested_merge is not None:
            merged = self._merger.merge(files, structure.suggested_merge)
            log_event(
                logger,
                logging.INFO,
                "files_merged",
                files=list(merged.source_files),
                strategy=merged.strategy,
                rows=len(merged.rows),
            )

        return ProcessedData(raw=tuple(files), structure=structure, merged=merged)

    def aggregate(
        self,
        processed: ProcessedData,
        group_by: Sequence[str],
        aggregations: Sequence[Aggregation],
    ) -> list[dict[str, Any]]:
        """
        Group rows by the string form of ``group_by`` values and aggregate
        numeric cells.

        The merged dataset is used when present, else the first raw file.
        Non-numeric values are ignored by every operation.

        Returns:
            One dict per group, in first-seen group order::

                {<group column>: value, ..., "<column>_<op>": result, ...}
        """

        for aggregation in aggregations:
            if aggregation.operation not in ALLOWED_AGGREGATION_OPS:
                allowed = ", ".join(sorted(ALLOWED_AGGREGATION_OPS))
                raise ProcessingError(
                    f"Unsupported aggregation {aggregation.operation!r}. Allowed values: {allowed}."
                )

        source = processed.merged or (processed.raw[0] if processed.raw else None)
        if source is None:
            return []

        groups: dict[tuple[str, ...], list[dict[str, Any]]] = {}
        for row in source.rows:
            values = row.as_dict(source.columns)
            key = tuple(_group_key_part(values.get(column)) for column in group_by)
            groups.setdefault(key, []).append(values)

        result: list[dict[str, Any]] = []
        for rows in groups.values():
            aggregated: dict[str, Any] = {column: rows[0].get(column) for column in group_by}
            for aggregation in aggregations:
                numbers = [
                    value
                    for value in (row.get(aggregation.column) for row in rows)
                    if isinstance(value, float)
                ]
                aggregated[aggregation.output_key] = _apply(aggregation.operation, numbers)
            result.append(aggregated)
        return result


def _group_key_part(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _apply(operation: str, numbers: list[float]) -> float | int | None:
    if operation == AggregationOp.COUNT:
        return len(numbers)
    if operation == AggregationOp.SUM:
        return float(np.sum(numbers)) if numbers else 0.0
    if operation == AggregationOp.AVG:
        return float(np.mean(numbers)) if numbers else 0.0
    if not numbers:
        return None
    if operation == AggregationOp.MIN:
        return float(np.min(numbers))
    return float(np.max(numbers))
