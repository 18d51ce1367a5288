"""
datamesh/domain/cells.py

Closed set of cell value variants produced by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


class CellKind:
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ABSENT = "absent"


@dataclass(frozen=True)
class TextCell:
    """
    Free text value.
    """

    value: str

    kind = CellKind.TEXT

    @property
    def is_absent(self) -> bool:
        return False

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberCell:
    """
    Finite double-precision number.
    """

    value: float

    kind = CellKind.NUMBER

    @property
    def is_absent(self) -> bool:
        return False

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class BooleanCell:
    value: bool

    kind = CellKind.BOOLEAN

    @property
    def is_absent(self) -> bool:
        return False

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class AbsentCell:
    """
    Missing value. Distinct from an empty string.
    """

    kind = CellKind.ABSENT

    @property
    def is_absent(self) -> bool:
        return True

    def to_python(self) -> None:
        return None


CellValue = Union[TextCell, NumberCell, BooleanCell, AbsentCell]

ABSENT = AbsentCell()


def cell_from_python(value: Any) -> CellValue:
    """
    Rebuild a cell from its plain python form.

    ``bool`` is checked before numbers because it is an ``int`` subclass.
    """

    if value is None:
        return ABSENT
    if isinstance(value, bool):
        return BooleanCell(value)
    if isinstance(value, (int, float)):
        return NumberCell(float(value))
    if isinstance(value, str):
        return TextCell(value)
    raise TypeError(f"Unsupported cell value type: {type(value).__name__}")


def is_blank_cell(cell: CellValue) -> bool:
    """
    Return True for absent cells and whitespace-only text.
    """

    if cell.is_absent:
        return True
    return isinstance(cell, TextCell) and cell.value.strip() == ""
