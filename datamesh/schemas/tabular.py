"""
datamesh/schemas/tabular.py

Serialization contracts for parsed files, their metadata, and validation
outcomes.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictStr

from datamesh.domain.cells import cell_from_python
from datamesh.domain.quality import QualityReport, ValidationIssue, ValidationResult
from datamesh.domain.tabular import Column, Metadata, ParsedFile, Row

# Absent cells serialize as null; text, numbers and booleans keep their JSON type.
CellScalar = Union[StrictBool, StrictFloat, StrictStr, None]

ColumnTypeName = Literal["text", "number", "date", "boolean", "unknown"]


class ContractModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ColumnSchema(ContractModel):
    name: str
    type: ColumnTypeName
    position: int = Field(..., ge=0)

    @classmethod
    def from_domain(cls, column: Column) -> "ColumnSchema":
        return cls(name=column.name, type=column.type, position=column.position)

    def to_domain(self) -> Column:
        return Column(name=self.name, type=self.type, position=self.position)


class RowSchema(ContractModel):
    index: int = Field(..., ge=0)
    cells: list[CellScalar]
    raw_fields: list[str]
    consistent: bool = True
    source_file: Optional[str] = None

    @classmethod
    def from_domain(cls, row: Row) -> "RowSchema":
        return cls(
            index=row.index,
            cells=[cell.to_python() for cell in row.cells],
            raw_fields=list(row.raw_fields),
            consistent=row.consistent,
            source_file=row.source_file,
        )

    def to_domain(self) -> Row:
        return Row(
            index=self.index,
            cells=tuple(cell_from_python(value) for value in self.cells),
            raw_fields=tuple(self.raw_fields),
            consistent=self.consistent,
            source_file=self.source_file,
        )


class MetadataSchema(ContractModel):
    """
    Serialized per-file descriptor.
    """

    file_name: str
    columns: list[ColumnSchema]
    column_types: list[ColumnTypeName]
    sample: list[RowSchema] = Field(default_factory=list)
    row_count: int = Field(..., ge=0)
    has_header: bool

    @classmethod
    def from_domain(cls, metadata: Metadata) -> "MetadataSchema":
        return cls(
            file_name=metadata.file_name,
            columns=[ColumnSchema.from_domain(column) for column in metadata.columns],
            column_types=list(metadata.column_types),
            sample=[RowSchema.from_domain(row) for row in metadata.sample],
            row_count=metadata.row_count,
            has_header=metadata.has_header,
        )

    def to_domain(self) -> Metadata:
        return Metadata(
            file_name=self.file_name,
            columns=tuple(column.to_domain() for column in self.columns),
            column_types=tuple(self.column_types),
            sample=tuple(row.to_domain() for row in self.sample),
            row_count=self.row_count,
            has_header=self.has_header,
        )


class ParsedFileSchema(ContractModel):
    file_name: str
    columns: list[ColumnSchema]
    rows: list[RowSchema]
    metadata: MetadataSchema
    delimiter: Literal[",", ";", "\t"] = ","

    @classmethod
    def from_domain(cls, parsed_file: ParsedFile) -> "ParsedFileSchema":
        return cls(
            file_name=parsed_file.file_name,
            columns=[ColumnSchema.from_domain(column) for column in parsed_file.columns],
            rows=[RowSchema.from_domain(row) for row in parsed_file.rows],
            metadata=MetadataSchema.from_domain(parsed_file.metadata),
            delimiter=parsed_file.delimiter,
        )

    def to_domain(self) -> ParsedFile:
        return ParsedFile(
            file_name=self.file_name,
            columns=tuple(column.to_domain() for column in self.columns),
            rows=tuple(row.to_domain() for row in self.rows),
            metadata=self.metadata.to_domain(),
            delimiter=self.delimiter,
        )


class ValidationIssueSchema(ContractModel):
    code: str
    message: str
    severity: Literal["error", "warning"]


class ValidationResultSchema(ContractModel):
    """
    API-facing validation outcome.
    """

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    issues: list[ValidationIssueSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: ValidationResult) -> "ValidationResultSchema":
        return cls(
            is_valid=result.is_valid,
            errors=list(result.errors),
            warnings=list(result.warnings),
            issues=[
                ValidationIssueSchema(code=issue.code, message=issue.message, severity=issue.severity)
                for issue in result.issues
            ],
        )

    def to_domain(self) -> ValidationResult:
        return ValidationResult(
            is_valid=self.is_valid,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            issues=tuple(
                ValidationIssue(code=issue.code, message=issue.message, severity=issue.severity)
                for issue in self.issues
            ),
        )


class QualityReportSchema(ContractModel):
    completeness: float = Field(..., ge=0.0, le=1.0)
    consistency: float = Field(..., ge=0.0, le=1.0)
    issues: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, report: QualityReport) -> "QualityReportSchema":
        return cls(
            completeness=report.completeness,
            consistency=report.consistency,
            issues=list(report.issues),
        )

    def to_domain(self) -> QualityReport:
        return QualityReport(
            completeness=self.completeness,
            consistency=self.consistency,
            issues=tuple(self.issues),
        )
