"""
datamesh/services/merger.py

Executes a merge strategy over parsed files.

Homogeneous    rows concatenated in file order under the first file's
               columns; later files are re-aligned by column name.
Heterogeneous  union of column names in first-seen order; every source row
               gets a value (possibly absent) for every unioned column.
"""

from __future__ import annotations

import logging
from typing import Sequence

from datamesh.analysis.type_inferencer import TypeInferencer
from datamesh.domain.cells import ABSENT, CellValue
from datamesh.domain.structure import (
    ALLOWED_MERGE_STRATEGIES,
    MergedData,
    MergeStrategy,
    MergeSuggestion,
)
from datamesh.domain.tabular import Column, ParsedFile, Row

logger = logging.getLogger(__name__)


class MergeContractError(AssertionError):
    """
    Raised when the merger is called with inputs no valid suggestion produces.
    """


class DataMerger:
    """
    Reads the source rows without mutating them.
    """

    def __init__(self, *, inferencer: TypeInferencer | None = None) -> None:
        self._inferencer = inferencer or TypeInferencer()

    def merge(
        self,
        files: Sequence[ParsedFile],
        strategy: str | MergeSuggestion,
    ) -> MergedData:
        if isinstance(strategy, MergeSuggestion):
            selected = self._select_files(files, strategy.files)
            strategy_name = strategy.strategy
        else:
            selected = list(files)
            strategy_name = strategy

        if strategy_name not in ALLOWED_MERGE_STRATEGIES:
            allowed = ", ".join(sorted(ALLOWED_MERGE_STRATEGIES))
            raise MergeContractError(f"Unsupported merge strategy {strategy_name!r}. Allowed: {allowed}.")
        if not selected:
            raise MergeContractError("Merge requires at least one file.")

        if strategy_name == MergeStrategy.HOMOGENEOUS:
            merged = self.merge_homogeneous(selected)
        else:
            merged = self.merge_heterogeneous(selected)

        logger.debug(
            "Merged files=%s strategy=%s rows=%s columns=%s",
            len(selected),
            strategy_name,
            len(merged.rows),
            len(merged.columns),
        )
        return merged

    def merge_homogeneous(self, files: Sequence[ParsedFile]) -> MergedData:
        first = files[0]
        target_names = first.column_names

        rows: list[Row] = []
        for parsed_file in files:
            position_map = align_positions(target_names, parsed_file.column_names)
            if position_map is None:
                raise MergeContractError(
                    f"File {parsed_file.file_name!r} does not share the column structure of "
                    f"{first.file_name!r}."
                )
            identity = position_map == list(range(len(target_names)))
            for row in parsed_file.rows:
                if identity:
                    cells = row.cells
                    raw_fields = row.raw_fields
                else:
                    cells = tuple(row.value(position) for position in position_map)
                    raw_fields = (
                        tuple(row.raw_fields[position] for position in position_map)
                        if row.consistent
                        else row.raw_fields
                    )
                rows.append(
                    Row(
                        index=len(rows),
                        cells=cells,
                        raw_fields=raw_fields,
                        consistent=row.consistent,
                        source_file=parsed_file.file_name,
                    )
                )

        return MergedData(
            columns=first.columns,
            rows=tuple(rows),
            source_files=tuple(parsed_file.file_name for parsed_file in files),
            strategy=MergeStrategy.HOMOGENEOUS,
        )

    def merge_heterogeneous(self, files: Sequence[ParsedFile]) -> MergedData:
        union_names: list[str] = []
        for parsed_file in files:
            for name in parsed_file.column_names:
                if name not in union_names:
                    union_names.append(name)

        rows: list[Row] = []
        for parsed_file in files:
            lookup: dict[str, int] = {}
            for column in parsed_file.columns:
                lookup.setdefault(column.name, column.position)

            for row in parsed_file.rows:
                cells: list[CellValue] = []
                raw_fields: list[str] = []
                for name in union_names:
                    position = lookup.get(name)
                    if position is None:
                        cells.append(ABSENT)
                        raw_fields.append("")
                        continue
                    cells.append(row.value(position))
                    raw_fields.append(
                        row.raw_fields[position] if position < len(row.raw_fields) else ""
                    )
                rows.append(
                    Row(
                        index=len(rows),
                        cells=tuple(cells),
                        raw_fields=tuple(raw_fields),
                        consistent=True,
                        source_file=parsed_file.file_name,
                    )
                )

        columns = tuple(
            Column(
                name=name,
                type=self._inferencer.infer(row.cells[position] for row in rows),
                position=position,
            )
            for position, name in enumerate(union_names)
        )
        return MergedData(
            columns=columns,
            rows=tuple(rows),
            source_files=tuple(parsed_file.file_name for parsed_file in files),
            strategy=MergeStrategy.HETEROGENEOUS,
        )

    @staticmethod
    def _select_files(files: Sequence[ParsedFile], names: Sequence[str]) -> list[ParsedFile]:
        files_by_name = {parsed_file.file_name: parsed_file for parsed_file in files}
        missing = [name for name in names if name not in files_by_name]
        if missing:
            raise MergeContractError(
                f"Merge suggestion references files that were not provided: {', '.join(missing)}"
            )
        return [files_by_name[name] for name in names]


def align_positions(target_names: Sequence[str], source_names: Sequence[str]) -> list[int] | None:
    """
    Map each target column to the source position holding the same name.

    The n-th occurrence of a duplicated name maps to its n-th occurrence in
    the source. Returns None when the name multisets differ.
    """

    if sorted(target_names) != sorted(source_names):
        return None

    positions_by_name: dict[str, list[int]] = {}
    for position, name in enumerate(source_names):
        positions_by_name.setdefault(name, []).append(position)

    mapping: list[int] = []
    used: dict[str, int] = {}
    for name in target_names:
        occurrence = used.get(name, 0)
        mapping.append(positions_by_name[name][occurrence])
        used[name] = occurrence + 1
    return mapping
