"""
datamesh/domain/quality.py

Validation and quality outcomes for one parsed file.
"""

from __future__ import annotations

from dataclasses import dataclass


class IssueSeverity:
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """
    One structured validation finding.
    """

    code: str
    message: str
    severity: str


@dataclass(frozen=True)
class ValidationResult:
    """
    Structural validation outcome. Errors flag a file whose columns cannot be
    trusted; warnings are advisory. Neither blocks downstream processing.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    issues: tuple[ValidationIssue, ...] = ()

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> "ValidationResult":
        errors = tuple(issue.message for issue in issues if issue.severity == IssueSeverity.ERROR)
        warnings = tuple(issue.message for issue in issues if issue.severity == IssueSeverity.WARNING)
        return cls(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            issues=tuple(issues),
        )

    def codes(self) -> set[str]:
        return {issue.code for issue in self.issues}


@dataclass(frozen=True)
class QualityReport:
    """
    Advisory completeness and consistency ratios, both in [0, 1].
    """

    completeness: float
    consistency: float
    issues: tuple[str, ...] = ()
