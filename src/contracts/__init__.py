"""Error taxonomy, board checks and artifact contracts."""

from __future__ import annotations

from .errors import (
    ConstructionInvariantViolation,
    InvalidDifficultyParameter,
    KandokuError,
    PostGenerationValidityFailure,
    SchemaValidationError,
    ValidationIssue,
    ValidationReport,
)
from .validator import assert_valid_board, is_valid_board, validate_board

__all__ = [
    "ConstructionInvariantViolation",
    "InvalidDifficultyParameter",
    "KandokuError",
    "PostGenerationValidityFailure",
    "SchemaValidationError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid_board",
    "is_valid_board",
    "validate_board",
]
