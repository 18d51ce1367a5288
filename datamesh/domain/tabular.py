"""
datamesh/domain/tabular.py

Domain models for one parsed tabular file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from datamesh.domain.cells import ABSENT, CellValue


class ColumnType:
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


ALL_COLUMN_TYPES: tuple[str, ...] = (
    ColumnType.TEXT,
    ColumnType.NUMBER,
    ColumnType.DATE,
    ColumnType.BOOLEAN,
    ColumnType.UNKNOWN,
)


@dataclass(frozen=True)
class Column:
    """
    One column of a file. Identity is the position, not the name.
    """

    name: str
    type: str
    position: int


@dataclass(frozen=True)
class Row:
    """
    One data row aligned to the owning file's column list.

    ``cells`` always has one entry per column; ``raw_fields`` keeps the
    unparsed field strings exactly as they were split from the source line.
    """

    index: int
    cells: tuple[CellValue, ...]
    raw_fields: tuple[str, ...]
    consistent: bool = True
    source_file: str | None = None

    def value(self, position: int) -> CellValue:
        if 0 <= position < len(self.cells):
            return self.cells[position]
        return ABSENT

    def as_dict(self, columns: Sequence[Column]) -> dict[str, Any]:
        """
        Map column names to plain python values.

        The first column carrying a duplicated name wins.
        """

        result: dict[str, Any] = {}
        for column in columns:
            if column.name not in result:
                result[column.name] = self.value(column.position).to_python()
        return result


@dataclass(frozen=True)
class Metadata:
    """
    Immutable descriptor of one parsed file.
    """

    file_name: str
    columns: tuple[Column, ...]
    column_types: tuple[str, ...]
    sample: tuple[Row, ...]
    row_count: int
    has_header: bool

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)


@dataclass(frozen=True)
class ParsedFile:
    """
    Parser output: the typed grid of one file plus its descriptor.
    """

    file_name: str
    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    metadata: Metadata
    delimiter: str = ","

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def column_position(self, name: str) -> int | None:
        for column in self.columns:
            if column.name == name:
                return column.position
        return None
