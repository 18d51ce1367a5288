"""
datamesh/domain/structure.py

Cross-file analysis results and merged datasets.
"""

from __future__ import annotations

from dataclasses import dataclass

from datamesh.domain.tabular import Column, Metadata, ParsedFile, Row


class RelationKind:
    KEY = "key"
    TEMPORAL = "temporal"
    CATEGORY = "category"
    SEMANTIC = "semantic"


class MergeStrategy:
    HOMOGENEOUS = "homogeneous"
    HETEROGENEOUS = "heterogeneous"


ALLOWED_MERGE_STRATEGIES = {
    MergeStrategy.HOMOGENEOUS,
    MergeStrategy.HETEROGENEOUS,
}


@dataclass(frozen=True)
class ColumnRef:
    """
    Identifies a column by file and name.
    """

    file_name: str
    column_name: str

    @property
    def label(self) -> str:
        return f"{self.file_name}.{self.column_name}"


@dataclass(frozen=True)
class Relation:
    kind: str
    source: ColumnRef
    target: ColumnRef
    confidence: float
    description: str


@dataclass(frozen=True)
class SemanticOverlap:
    """
    Unordered pair of similarly named columns.
    """

    column_a: ColumnRef
    column_b: ColumnRef
    similarity: float
    description: str

    def pair(self) -> frozenset[ColumnRef]:
        return frozenset((self.column_a, self.column_b))


@dataclass(frozen=True)
class MergeSuggestion:
    files: tuple[str, ...]
    strategy: str
    assumptions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Structure:
    """
    Result of one analysis call. Rebuilt from scratch every time.
    """

    tables: tuple[Metadata, ...]
    relations: tuple[Relation, ...] = ()
    overlaps: tuple[SemanticOverlap, ...] = ()
    suggested_merge: MergeSuggestion | None = None


@dataclass(frozen=True)
class MergedData:
    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    source_files: tuple[str, ...]
    strategy: str

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)


@dataclass(frozen=True)
class ProcessedData:
    """
    Raw files, their structure, and the merged dataset when one was built.
    """

    raw: tuple[ParsedFile, ...]
    structure: Structure
    merged: MergedData | None = None
