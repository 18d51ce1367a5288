"""
datamesh/validators/dataset_validator.py

Structural validation and quality scoring for one parsed file.
"""

from __future__ import annotations

from collections import Counter

from datamesh.domain.cells import is_blank_cell
from datamesh.domain.quality import IssueSeverity, QualityReport, ValidationIssue, ValidationResult
from datamesh.domain.tabular import ParsedFile


class ValidationCode:
    EMPTY_DATASET = "empty_dataset"
    DUPLICATE_COLUMNS = "duplicate_columns"
    INCONSISTENT_ROWS = "inconsistent_rows"
    EMPTY_COLUMNS = "empty_columns"


class DataValidator:
    """
    Validates parsed files. Findings are returned, never raised.
    """

    def __init__(
        self,
        *,
        low_completeness_threshold: float = 0.8,
        small_dataset_rows: int = 10,
    ) -> None:
        self._low_completeness_threshold = low_completeness_threshold
        self._small_dataset_rows = max(0, small_dataset_rows)

    def validate(self, parsed_file: ParsedFile) -> ValidationResult:
        """
        Check emptiness, field-count consistency, empty columns, and
        duplicate column names.
        """

        issues: list[ValidationIssue] = []
        rows = parsed_file.rows
        column_count = len(parsed_file.columns)

        if not rows:
            issues.append(
                ValidationIssue(
                    code=ValidationCode.EMPTY_DATASET,
                    message="File contains no data rows",
                    severity=IssueSeverity.ERROR,
                )
            )

        inconsistent = self._count_inconsistent_rows(parsed_file)
        if inconsistent:
            issues.append(
                ValidationIssue(
                    code=ValidationCode.INCONSISTENT_ROWS,
                    message=f"{inconsistent} row(s) have inconsistent column count",
                    severity=IssueSeverity.WARNING,
                )
            )

        empty_columns = [
            position
            for position in range(column_count)
            if all(is_blank_cell(row.value(position)) for row in rows)
        ]
        if empty_columns:
            issues.append(
                ValidationIssue(
                    code=ValidationCode.EMPTY_COLUMNS,
                    message=f"{len(empty_columns)} column(s) appear to be empty",
                    severity=IssueSeverity.WARNING,
                )
            )

        duplicates = find_duplicates(parsed_file.column_names)
        if duplicates:
            issues.append(
                ValidationIssue(
                    code=ValidationCode.DUPLICATE_COLUMNS,
                    message=f"Duplicate column names found: {', '.join(duplicates)}",
                    severity=IssueSeverity.ERROR,
                )
            )

        return ValidationResult.from_issues(issues)

    def check_quality(self, parsed_file: ParsedFile) -> QualityReport:
        """
        Completeness and consistency ratios plus advisory issue texts.
        """

        issues: list[str] = []
        rows = parsed_file.rows
        completeness = 1.0
        consistency = 1.0

        total_cells = len(rows) * len(parsed_file.columns)
        if total_cells > 0:
            blank_cells = sum(1 for row in rows for cell in row.cells if is_blank_cell(cell))
            completeness = 1.0 - blank_cells / total_cells
            if completeness < self._low_completeness_threshold:
                issues.append(f"Low data completeness: {completeness * 100:.1f}%")

        if rows:
            inconsistent = self._count_inconsistent_rows(parsed_file)
            consistency = 1.0 - inconsistent / len(rows)
            if inconsistent:
                issues.append(f"{inconsistent} row(s) have inconsistent column counts")

        if len(rows) < self._small_dataset_rows:
            issues.append(f"Very small dataset (less than {self._small_dataset_rows} rows)")

        return QualityReport(
            completeness=completeness,
            consistency=consistency,
            issues=tuple(issues),
        )

    @staticmethod
    def _count_inconsistent_rows(parsed_file: ParsedFile) -> int:
        column_count = len(parsed_file.columns)
        return sum(1 for row in parsed_file.rows if len(row.raw_fields) != column_count)


def find_duplicates(names: tuple[str, ...] | list[str]) -> list[str]:
    """
    Names occurring more than once, in first-seen order.
    """

    counts = Counter(names)
    return [name for name in counts if counts[name] > 1]
