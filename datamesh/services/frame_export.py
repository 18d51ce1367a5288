"""
datamesh/services/frame_export.py

Conversion of parsed or merged grids into pandas DataFrames for consumers
that chart or tabulate the data.
"""

from __future__ import annotations

import pandas as pd

from datamesh.domain.structure import MergedData
from datamesh.domain.tabular import ColumnType, ParsedFile

_PANDAS_DTYPES: dict[str, str] = {
    ColumnType.NUMBER: "float64",
    ColumnType.BOOLEAN: "boolean",
}


def to_dataframe(source: ParsedFile | MergedData, *, typed: bool = True) -> pd.DataFrame:
    """
    Build a DataFrame with one column per position.

    Duplicate column names are kept side by side. Absent cells become
    ``None`` (or the dtype's missing marker when ``typed`` is set and the
    column has a uniform number/boolean type).
    """

    records = [
        [cell.to_python() for cell in row.cells]
        for row in source.rows
    ]
    frame = pd.DataFrame.from_records(
        records,
        columns=[column.name for column in source.columns],
    )
    if not typed or frame.empty:
        return frame

    for column in source.columns:
        dtype = _PANDAS_DTYPES.get(column.type)
        if dtype is None or not _uniform(records, column.position, column.type):
            continue
        frame.isetitem(column.position, frame.iloc[:, column.position].astype(dtype))
    return frame


def _uniform(records: list[list[object]], position: int, column_type: str) -> bool:
    expected = float if column_type == ColumnType.NUMBER else bool
    return all(
        record[position] is None or type(record[position]) is expected
        for record in records
    )
