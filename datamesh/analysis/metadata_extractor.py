"""
datamesh/analysis/metadata_extractor.py

Packages parsed grids into immutable per-file descriptors and answers
simple questions across several descriptors.
"""

from __future__ import annotations

from typing import Sequence

from datamesh.analysis.type_inferencer import TypeInferencer
from datamesh.domain.tabular import Column, Metadata, ParsedFile, Row


class MetadataExtractor:
    """
    Pure packaging step between the parser and the structure analyzer.
    """

    def __init__(self, *, inferencer: TypeInferencer | None = None) -> None:
        self._inferencer = inferencer or TypeInferencer()

    def build_metadata(
        self,
        *,
        file_name: str,
        column_names: Sequence[str],
        rows: Sequence[Row],
        has_header: bool,
        sample_size: int = 5,
    ) -> Metadata:
        """
        Infer column types and wrap everything into a ``Metadata`` record.
        """

        column_types = tuple(
            self._inferencer.infer(row.value(position) for row in rows)
            for position in range(len(column_names))
        )
        columns = tuple(
            Column(name=name, type=column_type, position=position)
            for position, (name, column_type) in enumerate(zip(column_names, column_types))
        )
        return Metadata(
            file_name=file_name,
            columns=columns,
            column_types=column_types,
            sample=tuple(rows[: max(0, sample_size)]),
            row_count=len(rows),
            has_header=has_header,
        )

    @staticmethod
    def extract(parsed_file: ParsedFile) -> Metadata:
        return parsed_file.metadata

    def extract_all(self, parsed_files: Sequence[ParsedFile]) -> list[Metadata]:
        return [self.extract(parsed_file) for parsed_file in parsed_files]

    @staticmethod
    def get_column_types(parsed_file: ParsedFile) -> tuple[str, ...]:
        return parsed_file.metadata.column_types

    @staticmethod
    def get_sample(parsed_file: ParsedFile, count: int = 5) -> tuple[Row, ...]:
        return parsed_file.rows[: max(0, count)]

    @staticmethod
    def unique_column_names(metadatas: Sequence[Metadata]) -> list[str]:
        """
        Union of column names, first occurrence wins.
        """

        seen: dict[str, None] = {}
        for metadata in metadatas:
            for column in metadata.columns:
                seen.setdefault(column.name, None)
        return list(seen)

    @staticmethod
    def are_homogeneous(metadatas: Sequence[Metadata]) -> bool:
        """
        True when every file has the same sorted list of column names.

        Comparison is case-sensitive and counts duplicates.
        """

        if len(metadatas) <= 1:
            return True
        reference = sorted(metadatas[0].column_names)
        return all(sorted(metadata.column_names) == reference for metadata in metadatas[1:])
