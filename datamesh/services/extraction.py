"""
datamesh/services/extraction.py

Pulls plain values out of parsed files through data point references.
"""

from __future__ import annotations

from typing import Any, Sequence

from datamesh.domain.references import DataPointReference
from datamesh.domain.tabular import ParsedFile


class DataPointReferenceError(LookupError):
    """
    Raised when a reference names a file, column, or row that does not exist.
    """


def _find_file(files: Sequence[ParsedFile], name: str) -> ParsedFile:
    for parsed_file in files:
        if parsed_file.file_name == name:
            return parsed_file
    raise DataPointReferenceError(f"File not found: {name}")


def _column_position(parsed_file: ParsedFile, column: str) -> int:
    position = parsed_file.column_position(column)
    if position is None:
        raise DataPointReferenceError(
            f'Column "{column}" not found in file "{parsed_file.file_name}"'
        )
    return position


def extract_data_point(
    files: Sequence[ParsedFile],
    reference: DataPointReference,
) -> list[Any]:
    """
    Return every value of the referenced column, or just one row's value
    when ``reference.row_index`` is set.
    """

    parsed_file = _find_file(files, reference.file)
    position = _column_position(parsed_file, reference.column)

    if reference.row_index is not None:
        if not 0 <= reference.row_index < len(parsed_file.rows):
            raise DataPointReferenceError(
                f"Row index {reference.row_index} out of bounds for file "
                f'"{parsed_file.file_name}"'
            )
        return [parsed_file.rows[reference.row_index].value(position).to_python()]

    return [row.value(position).to_python() for row in parsed_file.rows]


def extract_multiple_data_points(
    files: Sequence[ParsedFile],
    references: Sequence[DataPointReference],
) -> list[dict[str, Any]]:
    """
    Zip several references row by row into ``{"file::column": value}`` dicts.

    The result is as long as the longest referenced file; shorter files are
    padded with None. A reference with ``row_index`` repeats that row's value.
    """

    if not references:
        return []

    resolved = [
        (reference, *_resolve(files, reference))
        for reference in references
    ]
    max_rows = max(len(parsed_file.rows) for _reference, parsed_file, _position in resolved)

    result: list[dict[str, Any]] = []
    for row_index in range(max_rows):
        row: dict[str, Any] = {}
        for reference, parsed_file, position in resolved:
            actual_index = reference.row_index if reference.row_index is not None else row_index
            if 0 <= actual_index < len(parsed_file.rows):
                row[reference.key] = parsed_file.rows[actual_index].value(position).to_python()
            else:
                row[reference.key] = None
        result.append(row)
    return result


def extract_data_with_metadata(
    files: Sequence[ParsedFile],
    references: Sequence[DataPointReference],
) -> list[dict[str, Any]]:
    """
    Same as :func:`extract_multiple_data_points` with a ``_metadata`` entry
    tracing each row back to the first referenced file.
    """

    data = extract_multiple_data_points(files, references)
    primary_file = references[0].file if references else ""
    return [
        {**row, "_metadata": {"row_index": index, "source_file": primary_file}}
        for index, row in enumerate(data)
    ]


def extract_unique_values(
    files: Sequence[ParsedFile],
    reference: DataPointReference,
) -> list[Any]:
    """
    Distinct non-null values in first-seen order.

    Booleans and numbers stay distinct (``True`` is not ``1.0``).
    """

    seen: set[tuple[type, Any]] = set()
    unique: list[Any] = []
    for value in extract_data_point(files, reference):
        if value is None:
            continue
        marker = (type(value), value)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(value)
    return unique


def _resolve(files: Sequence[ParsedFile], reference: DataPointReference) -> tuple[ParsedFile, int]:
    parsed_file = _find_file(files, reference.file)
    return parsed_file, _column_position(parsed_file, reference.column)
