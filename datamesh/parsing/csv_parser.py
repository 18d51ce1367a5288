"""
datamesh/parsing/csv_parser.py

Delimiter detection, quote-aware field splitting, and value coercion for
delimited text files of unknown shape.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.domain.cells import ABSENT, BooleanCell, CellValue, NumberCell, TextCell
from datamesh.domain.tabular import ParsedFile, Row

logger = logging.getLogger(__name__)

# Precedence order breaks ties between equal counts.
DELIMITERS: tuple[str, ...] = (",", ";", "\t")

_LINE_BREAK = re.compile(r"\r?\n")
_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_QUOTE = '"'


class ParseErrorCode:
    EMPTY_INPUT = "empty_input"
    UNDECODABLE = "undecodable"


class ParseError(ValueError):
    """
    Raised when a file cannot produce any usable grid.
    """

    def __init__(self, *, code: str, message: str, file_name: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.file_name = file_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "file_name": self.file_name,
        }


def split_lines(text: str) -> list[str]:
    """
    Split on ``\\r\\n`` or ``\\n`` and drop whitespace-only lines.
    """

    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def detect_delimiter(line: str) -> str:
    """
    Pick the delimiter occurring most often in ``line``.
    """

    best = DELIMITERS[0]
    best_count = 0
    for delimiter in DELIMITERS:
        count = line.count(delimiter)
        if count > best_count:
            best = delimiter
            best_count = count
    return best


def split_fields(line: str, delimiter: str) -> list[str]:
    """
    Split one line into fields.

    Double quotes toggle quoting, ``""`` inside a quoted section is a literal
    quote, and whitespace is trimmed only where it lies outside quotes.
    """

    fields: list[str] = []
    # (character, was_quoted) pairs for the field being built
    current: list[tuple[str, bool]] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == _QUOTE:
            if in_quotes and index + 1 < length and line[index + 1] == _QUOTE:
                current.append((_QUOTE, True))
                index += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(_finish_field(current))
            current = []
        else:
            current.append((char, in_quotes))
        index += 1

    fields.append(_finish_field(current))
    return fields


def _finish_field(chars: list[tuple[str, bool]]) -> str:
    start = 0
    end = len(chars)
    while start < end and not chars[start][1] and chars[start][0].isspace():
        start += 1
    while end > start and not chars[end - 1][1] and chars[end - 1][0].isspace():
        end -= 1
    return "".join(char for char, _quoted in chars[start:end])


def parse_number(text: str) -> float | None:
    """
    Return the finite float spelled by ``text``, else None.
    """

    candidate = text.strip()
    if not _NUMBER_PATTERN.match(candidate):
        return None
    try:
        value = float(candidate)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def coerce_value(field: str) -> CellValue:
    """
    Coerce one field: empty → absent, true/false → boolean, finite number →
    number, anything else → text.
    """

    if field == "":
        return ABSENT

    lowered = field.lower()
    if lowered == "true":
        return BooleanCell(True)
    if lowered == "false":
        return BooleanCell(False)

    number = parse_number(field)
    if number is not None:
        return NumberCell(number)

    return TextCell(field)


def looks_like_header(fields: list[str]) -> bool:
    """
    A line is a header when a strict majority of its fields are not numbers.
    """

    non_numeric = sum(1 for field in fields if parse_number(field) is None)
    return non_numeric > len(fields) / 2


def synthesize_column_names(count: int) -> list[str]:
    return [f"Column {position + 1}" for position in range(count)]


class CSVParser:
    """
    Turns raw delimited text into a typed, metadata-backed grid.
    """

    def __init__(
        self,
        *,
        extractor: MetadataExtractor | None = None,
        sample_size: int = 5,
    ) -> None:
        self._extractor = extractor or MetadataExtractor()
        self._sample_size = max(0, sample_size)

    def can_parse(self, content: str | bytes) -> bool:
        """
        Cheap pre-check: True when the content has at least one non-blank line.
        """

        try:
            text = self._decode(content, file_name=None)
        except ParseError:
            return False
        return bool(text.strip()) and bool(split_lines(text))

    def parse(self, content: str | bytes, file_name: str) -> ParsedFile:
        """
        Parse one file.

        Rows whose field count differs from the column count are kept and
        flagged inconsistent so validation can report them.
        """

        text = self._decode(content, file_name=file_name)
        if not text.strip():
            raise ParseError(
                code=ParseErrorCode.EMPTY_INPUT,
                message="File is empty.",
                file_name=file_name,
            )

        lines = split_lines(text)
        delimiter = detect_delimiter(lines[0])
        first_fields = split_fields(lines[0], delimiter)
        has_header = looks_like_header(first_fields)

        column_names = first_fields if has_header else synthesize_column_names(len(first_fields))
        column_count = len(column_names)
        data_lines = lines[1:] if has_header else lines

        rows: list[Row] = []
        for row_index, line in enumerate(data_lines):
            raw_fields = split_fields(line, delimiter)
            cells = tuple(
                coerce_value(raw_fields[position]) if position < len(raw_fields) else ABSENT
                for position in range(column_count)
            )
            rows.append(
                Row(
                    index=row_index,
                    cells=cells,
                    raw_fields=tuple(raw_fields),
                    consistent=len(raw_fields) == column_count,
                    source_file=file_name,
                )
            )

        metadata = self._extractor.build_metadata(
            file_name=file_name,
            column_names=column_names,
            rows=rows,
            has_header=has_header,
            sample_size=self._sample_size,
        )
        logger.debug(
            "Parsed file=%r delimiter=%r has_header=%s columns=%s rows=%s",
            file_name,
            delimiter,
            has_header,
            column_count,
            len(rows),
        )
        return ParsedFile(
            file_name=file_name,
            columns=metadata.columns,
            rows=tuple(rows),
            metadata=metadata,
            delimiter=delimiter,
        )

    @staticmethod
    def _decode(content: str | bytes, *, file_name: str | None) -> str:
        if isinstance(content, (bytes, bytearray)):
            try:
                return bytes(content).decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise ParseError(
                    code=ParseErrorCode.UNDECODABLE,
                    message="File must be UTF-8 encoded.",
                    file_name=file_name,
                ) from exc
        return content.lstrip("\ufeff")
