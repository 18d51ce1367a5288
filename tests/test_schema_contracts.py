"""
tests/test_schema_contracts.py

Serialized contracts must reproduce the domain objects they were built from.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from datamesh.analysis.structure_analyzer import StructureAnalyzer
from datamesh.domain.structure import MergeStrategy
from datamesh.parsing.csv_parser import CSVParser
from datamesh.schemas import (
    MergedDataSchema,
    ParsedFileSchema,
    QualityReportSchema,
    RowSchema,
    StructureSchema,
    ValidationResultSchema,
)
from datamesh.services.merger import DataMerger
from datamesh.validators.dataset_validator import DataValidator


@pytest.fixture()
def parser() -> CSVParser:
    return CSVParser()


def test_parsed_file_survives_json(parser: CSVParser) -> None:
    parsed = parser.parse('name;score;ok\n"Ana";1.5;true\nBo;;FALSE\n', "mixed.csv")

    payload = ParsedFileSchema.from_domain(parsed).model_dump_json()
    restored = ParsedFileSchema.model_validate_json(payload).to_domain()

    assert restored == parsed


def test_row_cells_keep_json_types(parser: CSVParser) -> None:
    parsed = parser.parse("a,b,c,d\ntext,2,true,\n", "types.csv")

    dumped = RowSchema.from_domain(parsed.rows[0]).model_dump()

    assert dumped["cells"] == ["text", 2.0, True, None]


def test_structure_and_merge_survive_json(parser: CSVParser) -> None:
    files = [
        parser.parse("order_id,total\n1,10\n", "orders.csv"),
        parser.parse("customer_id,order_id,created\n7,1,2024-01-01\n", "customers.csv"),
    ]
    structure = StructureAnalyzer().analyze([parsed.metadata for parsed in files])
    merged = DataMerger().merge(files, structure.suggested_merge)

    restored_structure = StructureSchema.model_validate_json(
        StructureSchema.from_domain(structure).model_dump_json()
    ).to_domain()
    restored_merged = MergedDataSchema.model_validate_json(
        MergedDataSchema.from_domain(merged).model_dump_json()
    ).to_domain()

    assert restored_structure == structure
    assert restored_merged == merged
    assert restored_merged.strategy == MergeStrategy.HETEROGENEOUS


def test_validation_and_quality_survive_json(parser: CSVParser) -> None:
    parsed = parser.parse("id,id\n1,\n", "dup.csv")
    validator = DataValidator()
    result = validator.validate(parsed)
    report = validator.check_quality(parsed)

    restored_result = ValidationResultSchema.model_validate_json(
        ValidationResultSchema.from_domain(result).model_dump_json()
    ).to_domain()
    restored_report = QualityReportSchema.model_validate_json(
        QualityReportSchema.from_domain(report).model_dump_json()
    ).to_domain()

    assert restored_result == result
    assert restored_report == report


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        QualityReportSchema.model_validate(
            {"completeness": 1.0, "consistency": 1.0, "issues": [], "extra": 1}
        )


def test_ratio_bounds_are_enforced() -> None:
    with pytest.raises(ValidationError):
        QualityReportSchema(completeness=1.5, consistency=1.0)
