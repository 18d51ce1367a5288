"""
datamesh

Typed parsing and cross-file structure analysis for delimited text files.
The module-level functions delegate to the cached default service.
"""

from __future__ import annotations

from typing import Sequence

from datamesh.domain import (
    MergedData,
    MergeSuggestion,
    Metadata,
    ParsedFile,
    QualityReport,
    Structure,
    ValidationResult,
)
from datamesh.parsing import ParseError
from datamesh.services import DatasetIngestionService, get_ingestion_service
from datamesh.services.ingestion_service import FileContent


def parse_file(name: str, content: FileContent) -> ParsedFile:
    return get_ingestion_service().parse_file(name, content)


def validate(parsed_file: ParsedFile) -> ValidationResult:
    return get_ingestion_service().validate(parsed_file)


def check_quality(parsed_file: ParsedFile) -> QualityReport:
    return get_ingestion_service().check_quality(parsed_file)


def extract_all(files: Sequence[ParsedFile]) -> list[Metadata]:
    return get_ingestion_service().extract_all(files)


def analyze_structure(metadatas: Sequence[Metadata]) -> Structure:
    return get_ingestion_service().analyze_structure(metadatas)


def merge_files(files: Sequence[ParsedFile], strategy: str | MergeSuggestion) -> MergedData:
    return get_ingestion_service().merge_files(files, strategy)


__all__ = [
    "DatasetIngestionService",
    "ParseError",
    "analyze_structure",
    "check_quality",
    "extract_all",
    "get_ingestion_service",
    "merge_files",
    "parse_file",
    "validate",
]
