"""
datamesh/schemas/structure.py

Serialization contracts for cross-file analysis results and merged data.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from datamesh.domain.structure import (
    ColumnRef,
    MergedData,
    MergeSuggestion,
    Relation,
    SemanticOverlap,
    Structure,
)
from datamesh.schemas.tabular import ColumnSchema, ContractModel, MetadataSchema, RowSchema

MergeStrategyName = Literal["homogeneous", "heterogeneous"]


class ColumnRefSchema(ContractModel):
    file_name: str
    column_name: str

    @classmethod
    def from_domain(cls, ref: ColumnRef) -> "ColumnRefSchema":
        return cls(file_name=ref.file_name, column_name=ref.column_name)

    def to_domain(self) -> ColumnRef:
        return ColumnRef(file_name=self.file_name, column_name=self.column_name)


class RelationSchema(ContractModel):
    kind: Literal["key", "temporal", "category", "semantic"]
    source: ColumnRefSchema
    target: ColumnRefSchema
    confidence: float = Field(..., ge=0.0, le=1.0)
    description: str

    @classmethod
    def from_domain(cls, relation: Relation) -> "RelationSchema":
        return cls(
            kind=relation.kind,
            source=ColumnRefSchema.from_domain(relation.source),
            target=ColumnRefSchema.from_domain(relation.target),
            confidence=relation.confidence,
            description=relation.description,
        )

    def to_domain(self) -> Relation:
        return Relation(
            kind=self.kind,
            source=self.source.to_domain(),
            target=self.target.to_domain(),
            confidence=self.confidence,
            description=self.description,
        )


class SemanticOverlapSchema(ContractModel):
    column_a: ColumnRefSchema
    column_b: ColumnRefSchema
    similarity: float = Field(..., ge=0.0, le=1.0)
    description: str

    @classmethod
    def from_domain(cls, overlap: SemanticOverlap) -> "SemanticOverlapSchema":
        return cls(
            column_a=ColumnRefSchema.from_domain(overlap.column_a),
            column_b=ColumnRefSchema.from_domain(overlap.column_b),
            similarity=overlap.similarity,
            description=overlap.description,
        )

    def to_domain(self) -> SemanticOverlap:
        return SemanticOverlap(
            column_a=self.column_a.to_domain(),
            column_b=self.column_b.to_domain(),
            similarity=self.similarity,
            description=self.description,
        )


class MergeSuggestionSchema(ContractModel):
    files: list[str]
    strategy: MergeStrategyName
    assumptions: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, suggestion: MergeSuggestion) -> "MergeSuggestionSchema":
        return cls(
            files=list(suggestion.files),
            strategy=suggestion.strategy,
            assumptions=list(suggestion.assumptions),
        )

    def to_domain(self) -> MergeSuggestion:
        return MergeSuggestion(
            files=tuple(self.files),
            strategy=self.strategy,
            assumptions=tuple(self.assumptions),
        )


class StructureSchema(ContractModel):
    """
    Serialized analysis result.
    """

    tables: list[MetadataSchema]
    relations: list[RelationSchema] = Field(default_factory=list)
    overlaps: list[SemanticOverlapSchema] = Field(default_factory=list)
    suggested_merge: Optional[MergeSuggestionSchema] = None

    @classmethod
    def from_domain(cls, structure: Structure) -> "StructureSchema":
        return cls(
            tables=[MetadataSchema.from_domain(table) for table in structure.tables],
            relations=[RelationSchema.from_domain(relation) for relation in structure.relations],
            overlaps=[SemanticOverlapSchema.from_domain(overlap) for overlap in structure.overlaps],
            suggested_merge=(
                MergeSuggestionSchema.from_domain(structure.suggested_merge)
                if structure.suggested_merge is not None
                else None
            ),
        )

    def to_domain(self) -> Structure:
        return Structure(
            tables=tuple(table.to_domain() for table in self.tables),
            relations=tuple(relation.to_domain() for relation in self.relations),
            overlaps=tuple(overlap.to_domain() for overlap in self.overlaps),
            suggested_merge=self.suggested_merge.to_domain() if self.suggested_merge else None,
        )


class MergedDataSchema(ContractModel):
    columns: list[ColumnSchema]
    rows: list[RowSchema]
    source_files: list[str]
    strategy: MergeStrategyName

    @classmethod
    def from_domain(cls, merged: MergedData) -> "MergedDataSchema":
        return cls(
            columns=[ColumnSchema.from_domain(column) for column in merged.columns],
            rows=[RowSchema.from_domain(row) for row in merged.rows],
            source_files=list(merged.source_files),
            strategy=merged.strategy,
        )

    def to_domain(self) -> MergedData:
        return MergedData(
            columns=tuple(column.to_domain() for column in self.columns),
            rows=tuple(row.to_domain() for row in self.rows),
            source_files=tuple(self.source_files),
            strategy=self.strategy,
        )
