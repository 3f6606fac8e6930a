"""Shared error types for board generation and validation."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List, Optional

SEVERITY_ERROR = "ERROR"


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a board rule or schema check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of checking one board."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    timings_ms: dict[str, int]


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


class KandokuError(RuntimeError):
    """Base class for every error raised by the generator."""


class ConstructionInvariantViolation(KandokuError):
    """The exact-cover search or its output contradicts how the matrix was built.

    A freshly built Sudoku matrix always has a cover, so this is never a
    transient condition and must not be retried.
    """


class InvalidDifficultyParameter(KandokuError, ValueError):
    """Requested difficulty or mask count lies outside the supported range."""


class PostGenerationValidityFailure(KandokuError):
    """A completed board failed the duplicate scan."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        detail = "; ".join(f"{issue.path}: {issue.msg}" for issue in report.errors)
        super().__init__(f"generated board is invalid: {detail}")


class SchemaValidationError(KandokuError):
    """Exception raised when an exported artifact fails validation."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


__all__ = [
    "SEVERITY_ERROR",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "KandokuError",
    "ConstructionInvariantViolation",
    "InvalidDifficultyParameter",
    "PostGenerationValidityFailure",
    "SchemaValidationError",
]
