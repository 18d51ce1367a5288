from __future__ import annotations

import pytest

from datamesh.analysis.metadata_extractor import MetadataExtractor
from datamesh.domain.tabular import ColumnType
from datamesh.parsing.csv_parser import CSVParser


@pytest.fixture()
def parser() -> CSVParser:
    return CSVParser()


@pytest.fixture()
def extractor() -> MetadataExtractor:
    return MetadataExtractor()


def test_extract_returns_parser_metadata(parser: CSVParser, extractor: MetadataExtractor) -> None:
    parsed = parser.parse("day,amount\n2024-01-01,3\n2024-01-02,4\n", "sales.csv")

    metadata = extractor.extract(parsed)

    assert metadata is parsed.metadata
    assert metadata.column_names == ("day", "amount")
    assert extractor.get_column_types(parsed) == (ColumnType.DATE, ColumnType.NUMBER)
    assert metadata.has_header is True


def test_get_sample_limits_rows(parser: CSVParser, extractor: MetadataExtractor) -> None:
    parsed = parser.parse("n\n1\n2\n3\n", "n.csv")

    assert len(extractor.get_sample(parsed, 2)) == 2
    assert extractor.get_sample(parsed, 10) == parsed.rows
    assert extractor.get_sample(parsed, 0) == ()


def test_unique_column_names_first_seen_order(parser: CSVParser, extractor: MetadataExtractor) -> None:
    files = [
        parser.parse("id,name\n1,a", "a.csv"),
        parser.parse("name,city,id\nb,Oslo,2", "b.csv"),
    ]

    names = extractor.unique_column_names(extractor.extract_all(files))

    assert names == ["id", "name", "city"]


class TestAreHomogeneous:
    def test_single_or_no_file_is_homogeneous(self, parser: CSVParser) -> None:
        metadata = parser.parse("a,b\n1,2", "one.csv").metadata

        assert MetadataExtractor.are_homogeneous([]) is True
        assert MetadataExtractor.are_homogeneous([metadata]) is True

    def test_column_order_does_not_matter(self, parser: CSVParser) -> None:
        first = parser.parse("id,name\n1,a", "a.csv").metadata
        second = parser.parse("name,id\nb,2", "b.csv").metadata

        assert MetadataExtractor.are_homogeneous([first, second]) is True
        assert MetadataExtractor.are_homogeneous([second, first]) is True

    def test_different_names_are_heterogeneous_both_ways(self, parser: CSVParser) -> None:
        first = parser.parse("id,name\n1,a", "a.csv").metadata
        second = parser.parse("id,Name\n2,b", "b.csv").metadata

        assert MetadataExtractor.are_homogeneous([first, second]) is False
        assert MetadataExtractor.are_homogeneous([second, first]) is False

    def test_duplicate_counts_matter(self, parser: CSVParser) -> None:
        first = parser.parse("id,id,name\n1,2,a", "a.csv").metadata
        second = parser.parse("id,name,name\n1,a,b", "b.csv").metadata

        assert MetadataExtractor.are_homogeneous([first, second]) is False
