"""
datamesh/domain/ingestion.py

Domain models for batch parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from datamesh.domain.tabular import ParsedFile


@dataclass(frozen=True)
class ParseFailure:
    """
    One file that could not be parsed.
    """

    file_name: str
    code: str
    message: str


@dataclass(frozen=True)
class BatchParseResult:
    """
    Outcome of parsing several files; order follows the input order.
    """

    files: list[ParsedFile] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.failures:
            return "success"
        return "partial_success" if self.files else "failed"
