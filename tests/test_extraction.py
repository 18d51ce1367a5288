from __future__ import annotations

import pytest

from datamesh.domain.references import DataPointReference
from datamesh.domain.tabular import ParsedFile
from datamesh.parsing.csv_parser import CSVParser
from datamesh.services.extraction import (
    DataPointReferenceError,
    extract_data_point,
    extract_data_with_metadata,
    extract_multiple_data_points,
    extract_unique_values,
)


@pytest.fixture()
def files() -> list[ParsedFile]:
    parser = CSVParser()
    return [
        parser.parse("city,pop,capital\nOslo,700000,true\nBergen,,false\nOslo,1,1\n", "cities.csv"),
        parser.parse("code\nNO\n", "codes.csv"),
    ]


class TestExtractDataPoint:
    def test_whole_column(self, files: list[ParsedFile]) -> None:
        values = extract_data_point(files, DataPointReference(file="cities.csv", column="pop"))

        assert values == [700000.0, None, 1.0]

    def test_single_row(self, files: list[ParsedFile]) -> None:
        reference = DataPointReference(file="cities.csv", column="city", row_index=1)

        assert extract_data_point(files, reference) == ["Bergen"]

    @pytest.mark.parametrize(
        "reference, message",
        [
            (DataPointReference(file="ghost.csv", column="city"), "File not found"),
            (DataPointReference(file="cities.csv", column="area"), 'Column "area"'),
            (DataPointReference(file="cities.csv", column="city", row_index=9), "out of bounds"),
        ],
    )
    def test_bad_references_raise(
        self, files: list[ParsedFile], reference: DataPointReference, message: str
    ) -> None:
        with pytest.raises(DataPointReferenceError, match=message):
            extract_data_point(files, reference)


def test_multiple_points_pad_shorter_files(files: list[ParsedFile]) -> None:
    references = [
        DataPointReference(file="cities.csv", column="city"),
        DataPointReference(file="codes.csv", column="code"),
    ]

    rows = extract_multiple_data_points(files, references)

    assert rows == [
        {"cities.csv::city": "Oslo", "codes.csv::code": "NO"},
        {"cities.csv::city": "Bergen", "codes.csv::code": None},
        {"cities.csv::city": "Oslo", "codes.csv::code": None},
    ]


def test_multiple_points_with_fixed_row(files: list[ParsedFile]) -> None:
    references = [
        DataPointReference(file="cities.csv", column="city"),
        DataPointReference(file="codes.csv", column="code", row_index=0),
    ]

    rows = extract_multiple_data_points(files, references)

    assert [row["codes.csv::code"] for row in rows] == ["NO", "NO", "NO"]
    assert extract_multiple_data_points(files, []) == []


def test_data_with_metadata_traces_rows(files: list[ParsedFile]) -> None:
    rows = extract_data_with_metadata(files, [DataPointReference(file="cities.csv", column="city")])

    assert rows[2]["_metadata"] == {"row_index": 2, "source_file": "cities.csv"}


def test_unique_values_keep_types_apart(files: list[ParsedFile]) -> None:
    assert extract_unique_values(files, DataPointReference(file="cities.csv", column="city")) == [
        "Oslo",
        "Bergen",
    ]
    capital = extract_unique_values(files, DataPointReference(file="cities.csv", column="capital"))
    assert capital == [True, False, 1.0]
