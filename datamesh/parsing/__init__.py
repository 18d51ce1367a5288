"""
datamesh/parsing package marker.
"""

from datamesh.parsing.csv_parser import (
    DELIMITERS,
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

__all__ = [
    "CSVParser",
    "DELIMITERS",
    "ParseError",
    "ParseErrorCode",
    "coerce_value",
    "detect_delimiter",
    "looks_like_header",
    "parse_number",
    "split_fields",
    "split_lines",
]
