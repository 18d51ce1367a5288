"""
datamesh/analysis/type_inferencer.py

Dominant-type classification for one column of parsed cells.
"""

from __future__ import annotations

import re
from typing import Iterable

from datamesh.domain.cells import BooleanCell, CellValue, NumberCell, TextCell
from datamesh.domain.tabular import ColumnType

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")


class TypeInferencer:
    """
    Threshold policy over the non-absent values of a column.

    Order: all boolean → boolean, all number → number, at least
    ``date_ratio_threshold`` of values date-like text → date, otherwise text.
    A column with no values is unknown.
    """

    def __init__(self, *, date_ratio_threshold: float = 0.8) -> None:
        self._date_ratio_threshold = max(0.0, min(1.0, date_ratio_threshold))

    def infer(self, cells: Iterable[CellValue]) -> str:
        values = [cell for cell in cells if not cell.is_absent]
        if not values:
            return ColumnType.UNKNOWN

        if all(isinstance(cell, BooleanCell) for cell in values):
            return ColumnType.BOOLEAN
        if all(isinstance(cell, NumberCell) for cell in values):
            return ColumnType.NUMBER

        date_like = sum(
            1 for cell in values if isinstance(cell, TextCell) and DATE_PATTERN.match(cell.value)
        )
        if date_like >= len(values) * self._date_ratio_threshold:
            return ColumnType.DATE

        return ColumnType.TEXT

    def infer_columns(self, columns: Iterable[Iterable[CellValue]]) -> list[str]:
        return [self.infer(cells) for cells in columns]
