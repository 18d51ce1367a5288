"""
datamesh/domain/references.py

Pointers into parsed files used by downstream consumers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DataPointReference:
    """
    Identifies a column of a file, optionally narrowed to one row (0-based).
    """

    file: str
    column: str
    row_index: int | None = None

    @property
    def key(self) -> str:
        return f"{self.file}::{self.column}"


@dataclass(frozen=True)
class ReferenceValidation:
    valid: bool
    errors: tuple[str, ...] = ()
