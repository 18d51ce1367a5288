"""
datamesh/domain package marker.
"""

from datamesh.domain.cells import (
    ABSENT,
    AbsentCell,
    BooleanCell,
    CellKind,
    CellValue,
    NumberCell,
    TextCell,
    cell_from_python,
    is_blank_cell,
)
from datamesh.domain.ingestion import BatchParseResult, ParseFailure
from datamesh.domain.quality import IssueSeverity, QualityReport, ValidationIssue, ValidationResult
from datamesh.domain.references import DataPointReference, ReferenceValidation
from datamesh.domain.structure import (
    ColumnRef,
    MergedData,
    MergeStrategy,
    MergeSuggestion,
    ProcessedData,
    Relation,
    RelationKind,
    SemanticOverlap,
    Structure,
)
from datamesh.domain.tabular import Column, ColumnType, Metadata, ParsedFile, Row

__all__ = [
    "ABSENT",
    "AbsentCell",
    "BatchParseResult",
    "BooleanCell",
    "CellKind",
    "CellValue",
    "Column",
    "DataPointReference",
    "ColumnRef",
    "ColumnType",
    "IssueSeverity",
    "MergedData",
    "MergeStrategy",
    "MergeSuggestion",
    "Metadata",
    "NumberCell",
    "ParseFailure",
    "ParsedFile",
    "ProcessedData",
    "QualityReport",
    "ReferenceValidation",
    "Relation",
    "RelationKind",
    "Row",
    "SemanticOverlap",
    "Structure",
    "TextCell",
    "ValidationIssue",
    "ValidationResult",
    "cell_from_python",
    "is_blank_cell",
]
