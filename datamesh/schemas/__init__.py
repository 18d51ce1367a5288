"""
datamesh/schemas package marker.
"""

from datamesh.schemas.structure import (
    ColumnRefSchema,
    MergedDataSchema,
    MergeSuggestionSchema,
    RelationSchema,
    SemanticOverlapSchema,
    StructureSchema,
)
from datamesh.schemas.tabular import (
    ColumnSchema,
    MetadataSchema,
    ParsedFileSchema,
    QualityReportSchema,
    RowSchema,
    ValidationIssueSchema,
    ValidationResultSchema,
)

__all__ = [
    "ColumnRefSchema",
    "ColumnSchema",
    "MergedDataSchema",
    "MergeSuggestionSchema",
    "MetadataSchema",
    "ParsedFileSchema",
    "QualityReportSchema",
    "RelationSchema",
    "RowSchema",
    "SemanticOverlapSchema",
    "StructureSchema",
    "ValidationIssueSchema",
    "ValidationResultSchema",
]
