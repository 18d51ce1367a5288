"""
tests/test_csv_parser.py

Pytest unit tests for CSVParser and its tokenizer helpers.

Coverage
--------
- Delimiter detection and precedence
- Quote-aware field splitting and trimming
- Value coercion priority
- Header detection and synthesized names
- Row count and malformed-row retention
- Empty / undecodable input errors
"""

from __future__ import annotations

import pytest

from datamesh.domain.cells import ABSENT, BooleanCell, NumberCell, TextCell
from datamesh.domain.tabular import ColumnType
from datamesh.parsing.csv_parser import (
    CSVParser,
    ParseError,
    ParseErrorCode,
    coerce_value,
    detect_delimiter,
    looks_like_header,
    parse_number,
    split_fields,
    split_lines,
)


@pytest.fixture()
def parser() -> CSVParser:
    return CSVParser()


# ---------------------------------------------------------------------------
# Delimiter detection
# ---------------------------------------------------------------------------


class TestDetectDelimiter:
    def test_picks_semicolon_when_most_frequent(self) -> None:
        assert detect_delimiter("Name;Age;Active") == ";"

    def test_picks_tab(self) -> None:
        assert detect_delimiter("a\tb\tc,d") == "\t"

    def test_tie_prefers_comma(self) -> None:
        assert detect_delimiter("a,b;c") == ","

    def test_tie_between_semicolon_and_tab_prefers_semicolon(self) -> None:
        assert detect_delimiter("a;b\tc") == ";"

    def test_no_delimiter_defaults_to_comma(self) -> None:
        assert detect_delimiter("single") == ","

    def test_is_deterministic_across_calls(self) -> None:
        line = "x;y,z;w\tq"
        assert {detect_delimiter(line) for _ in range(5)} == {";"}


# ---------------------------------------------------------------------------
# Field splitting
# ---------------------------------------------------------------------------


class TestSplitFields:
    def test_delimiter_inside_quotes_is_kept(self) -> None:
        assert split_fields('"a,b",c', ",") == ["a,b", "c"]

    def test_doubled_quote_is_literal(self) -> None:
        assert split_fields('"a""b"', ",") == ['a"b']

    def test_only_escaped_quote(self) -> None:
        assert split_fields('""""', ",") == ['"']

    def test_whitespace_outside_quotes_is_trimmed(self) -> None:
        assert split_fields("  a ,  b  ", ",") == ["a", "b"]

    def test_whitespace_inside_quotes_is_preserved(self) -> None:
        assert split_fields('  "  a  " ,b', ",") == ["  a  ", "b"]

    def test_empty_fields(self) -> None:
        assert split_fields("a,,", ",") == ["a", "", ""]

    def test_quoted_empty_field(self) -> None:
        assert split_fields('"",x', ",") == ["", "x"]


def test_split_lines_drops_blank_lines_and_handles_crlf() -> None:
    assert split_lines("a,b\r\n\r\n   \n1,2\n") == ["a,b", "1,2"]


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


class TestCoerceValue:
    def test_empty_string_is_absent(self) -> None:
        assert coerce_value("") is ABSENT

    @pytest.mark.parametrize("raw, expected", [("true", True), ("FALSE", False), ("True", True)])
    def test_booleans_are_case_insensitive(self, raw: str, expected: bool) -> None:
        assert coerce_value(raw) == BooleanCell(expected)

    @pytest.mark.parametrize(
        "raw, expected",
        [("29", 29.0), ("-3.5", -3.5), (".5", 0.5), ("1e3", 1000.0), ("+7", 7.0)],
    )
    def test_finite_numbers(self, raw: str, expected: float) -> None:
        assert coerce_value(raw) == NumberCell(expected)

    @pytest.mark.parametrize("raw", ["1e999", "inf", "NaN", "0x1F", "1_000", "12abc"])
    def test_non_finite_or_non_numeric_falls_back_to_text(self, raw: str) -> None:
        assert coerce_value(raw) == TextCell(raw)

    def test_parse_number_rejects_empty(self) -> None:
        assert parse_number("") is None


# ---------------------------------------------------------------------------
# Header detection
# ---------------------------------------------------------------------------


class TestHeaderDetection:
    def test_text_fields_form_a_header(self) -> None:
        assert looks_like_header(["a", "b", "3"]) is True

    def test_half_numeric_is_not_a_header(self) -> None:
        assert looks_like_header(["id", "2"]) is False

    def test_numeric_line_is_not_a_header(self, parser: CSVParser) -> None:
        parsed = parser.parse("1,2\n3,4\n", "numbers.csv")

        assert parsed.metadata.has_header is False
        assert parsed.column_names == ("Column 1", "Column 2")
        assert parsed.metadata.row_count == 2


# ---------------------------------------------------------------------------
# Full parse
# ---------------------------------------------------------------------------


class TestParse:
    def test_semicolon_file_with_quoted_text(self, parser: CSVParser) -> None:
        content = 'Name;Age;Active\n"Ana";29;true\n"Bo";;false\n'

        parsed = parser.parse(content, "people.csv")

        assert parsed.delimiter == ";"
        assert parsed.column_names == ("Name", "Age", "Active")
        assert parsed.metadata.column_types == (
            ColumnType.TEXT,
            ColumnType.NUMBER,
            ColumnType.BOOLEAN,
        )
        assert parsed.rows[0].cells == (TextCell("Ana"), NumberCell(29.0), BooleanCell(True))
        assert parsed.rows[1].value(1) is ABSENT
        assert parsed.rows[1].raw_fields == ("Bo", "", "false")

    def test_row_count_matches_non_blank_lines_minus_header(self, parser: CSVParser) -> None:
        content = "x,y\n1,2\n\n3,4\n   \n5,6"

        parsed = parser.parse(content, "grid.csv")

        non_blank = [line for line in content.splitlines() if line.strip()]
        assert parsed.metadata.row_count == len(parsed.rows)
        assert parsed.metadata.row_count == len(non_blank) - 1

    def test_rows_keep_source_order_and_file(self, parser: CSVParser) -> None:
        parsed = parser.parse("v\na\nb\nc", "letters.csv")

        assert [row.index for row in parsed.rows] == [0, 1, 2]
        assert [row.value(0).to_python() for row in parsed.rows] == ["a", "b", "c"]
        assert {row.source_file for row in parsed.rows} == {"letters.csv"}

    def test_malformed_rows_are_kept_and_flagged(self, parser: CSVParser) -> None:
        parsed = parser.parse("a,b\n1\n1,2,3\n4,5", "ragged.csv")

        assert len(parsed.rows) == 3
        short, long, ok = parsed.rows
        assert short.consistent is False
        assert short.cells == (NumberCell(1.0), ABSENT)
        assert long.consistent is False
        assert long.raw_fields == ("1", "2", "3")
        assert len(long.cells) == 2
        assert ok.consistent is True

    def test_sample_is_bounded(self) -> None:
        parser = CSVParser(sample_size=2)
        parsed = parser.parse("n\n1\n2\n3\n4", "n.csv")

        assert len(parsed.metadata.sample) == 2
        assert parsed.metadata.sample == parsed.rows[:2]

    def test_duplicate_header_names_are_kept_positionally(self, parser: CSVParser) -> None:
        parsed = parser.parse("id,id\n1,2", "dup.csv")

        assert parsed.column_names == ("id", "id")
        assert [column.position for column in parsed.columns] == [0, 1]

    def test_bytes_input_with_bom(self, parser: CSVParser) -> None:
        parsed = parser.parse("\ufeffcity,pop\nOslo,700000\n".encode("utf-8"), "cities.csv")

        assert parsed.column_names == ("city", "pop")
        assert parsed.rows[0].value(1) == NumberCell(700000.0)

    @pytest.mark.parametrize("content", ["", "   ", "\n\r\n\t\n"])
    def test_empty_input_raises(self, parser: CSVParser, content: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse(content, "empty.csv")

        assert exc_info.value.code == ParseErrorCode.EMPTY_INPUT
        assert exc_info.value.to_dict()["file_name"] == "empty.csv"

    def test_undecodable_bytes_raise(self, parser: CSVParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse(b"\xff\xfe\xfa", "binary.csv")

        assert exc_info.value.code == ParseErrorCode.UNDECODABLE

    def test_can_parse(self, parser: CSVParser) -> None:
        assert parser.can_parse("a,b\n1,2") is True
        assert parser.can_parse("  \n ") is False
        assert parser.can_parse(b"\xff\xfe\xfa") is False
