"""
datamesh/analysis/structure_analyzer.py

Deterministic cross-file structure analysis.

Passes
------
Key relations     same column name in two files, fixed confidence
Temporal columns  date-typed or time-sounding column names
Semantic overlap  pairwise column-name similarity above a threshold
Merge suggestion  homogeneous when schemas match, heterogeneous when the
                  files share at least one column name
"""

from __future__ import annotations

import logging
from typing import Sequence

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.analysis.similarity import name_similarity
from datamesh.domain.structure import (
    ColumnRef,
    MergeStrategy,
    MergeSuggestion,
    Relation,
    RelationKind,
    SemanticOverlap,
    Structure,
)
from datamesh.domain.tabular import ColumnType, Metadata

logger = logging.getLogger(__name__)

TIME_NAME_HINTS: tuple[str, ...] = ("date", "time", "timestamp", "created", "updated")


class StructureAnalyzer:
    """
    Detects relations, name overlaps, and a merge strategy across files.

    Reads metadata only; rows are never touched.
    """

    def __init__(
        self,
        *,
        key_confidence: float = 0.8,
        temporal_confidence: float = 0.9,
        similarity_threshold: float = 0.7,
        containment_similarity: float = 0.8,
    ) -> None:
        self._key_confidence = key_confidence
        self._temporal_confidence = temporal_confidence
        self._similarity_threshold = similarity_threshold
        self._containment_similarity = containment_similarity

    def analyze(self, metadatas: Sequence[Metadata]) -> Structure:
        tables = tuple(metadatas)
        self._check_unique_file_names(tables)

        relations = self.find_relations(tables)
        overlaps = self.detect_semantic_overlap(tables)
        suggested_merge = self.suggest_merge(tables)

        logger.debug(
            "Analyzed files=%s relations=%s overlaps=%s strategy=%s",
            len(tables),
            len(relations),
            len(overlaps),
            suggested_merge.strategy if suggested_merge else None,
        )
        return Structure(
            tables=tables,
            relations=tuple(relations),
            overlaps=tuple(overlaps),
            suggested_merge=suggested_merge,
        )

    def find_relations(self, metadatas: Sequence[Metadata]) -> list[Relation]:
        return [*self.find_key_relations(metadatas), *self.find_temporal_relations(metadatas)]

    def find_key_relations(self, metadatas: Sequence[Metadata]) -> list[Relation]:
        """
        One relation per pair of files sharing an exact column name.
        """

        files_by_name: dict[str, list[str]] = {}
        for metadata in metadatas:
            for column in metadata.columns:
                owners = files_by_name.setdefault(column.name, [])
                if metadata.file_name not in owners:
                    owners.append(metadata.file_name)

        relations: list[Relation] = []
        for column_name, owners in files_by_name.items():
            for i, source_file in enumerate(owners):
                for target_file in owners[i + 1:]:
                    relations.append(
                        Relation(
                            kind=RelationKind.KEY,
                            source=ColumnRef(source_file, column_name),
                            target=ColumnRef(target_file, column_name),
                            confidence=self._key_confidence,
                            description=f"Potential join key: {column_name}",
                        )
                    )
        return relations

    def find_temporal_relations(self, metadatas: Sequence[Metadata]) -> list[Relation]:
        relations: list[Relation] = []
        for metadata in metadatas:
            for column in metadata.columns:
                if column.type != ColumnType.DATE and not looks_like_time_column(column.name):
                    continue
                ref = ColumnRef(metadata.file_name, column.name)
                relations.append(
                    Relation(
                        kind=RelationKind.TEMPORAL,
                        source=ref,
                        target=ref,
                        confidence=self._temporal_confidence,
                        description=f"Time dimension: {column.name}",
                    )
                )
        return relations

    def detect_semantic_overlap(self, metadatas: Sequence[Metadata]) -> list[SemanticOverlap]:
        """
        Compare every unordered pair of columns, including pairs in one file.
        """

        refs = [
            ColumnRef(metadata.file_name, column.name)
            for metadata in metadatas
            for column in metadata.columns
        ]

        overlaps: list[SemanticOverlap] = []
        for i, first in enumerate(refs):
            for second in refs[i + 1:]:
                similarity = name_similarity(
                    first.column_name,
                    second.column_name,
                    containment_score=self._containment_similarity,
                )
                if similarity > self._similarity_threshold:
                    overlaps.append(
                        SemanticOverlap(
                            column_a=first,
                            column_b=second,
                            similarity=similarity,
                            description=(
                                f"Similar column names: {first.column_name} and {second.column_name}"
                            ),
                        )
                    )
        return overlaps

    def suggest_merge(self, metadatas: Sequence[Metadata]) -> MergeSuggestion | None:
        if len(metadatas) < 2:
            return None

        files = tuple(metadata.file_name for metadata in metadatas)
        if MetadataExtractor.are_homogeneous(metadatas):
            return MergeSuggestion(
                files=files,
                strategy=MergeStrategy.HOMOGENEOUS,
                assumptions=("All files have identical column structure",),
            )

        common = find_common_columns(metadatas)
        if common:
            return MergeSuggestion(
                files=files,
                strategy=MergeStrategy.HETEROGENEOUS,
                assumptions=(
                    f"Files share {len(common)} common column(s): {', '.join(common)}",
                    "Missing values will be filled with null",
                ),
            )
        return None

    @staticmethod
    def _check_unique_file_names(metadatas: Sequence[Metadata]) -> None:
        names = [metadata.file_name for metadata in metadatas]
        if len(names) != len(set(names)):
            raise AssertionError(
                f"File names must be unique within one analysis: {sorted(names)}"
            )


def looks_like_time_column(column_name: str) -> bool:
    lowered = column_name.lower()
    return any(hint in lowered for hint in TIME_NAME_HINTS)


def find_common_columns(metadatas: Sequence[Metadata]) -> list[str]:
    """
    Column names present in every file, in the first file's order.
    """

    if not metadatas:
        return []
    others = [set(metadata.column_names) for metadata in metadatas[1:]]
    common: list[str] = []
    for name in metadatas[0].column_names:
        if name not in common and all(name in names for names in others):
            common.append(name)
    return common
