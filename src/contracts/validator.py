"""Duplicate scan over completed or masked boards."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from project_config import get_section

from .errors import (
    PostGenerationValidityFailure,
    ValidationIssue,
    ValidationReport,
    make_error,
)

_SIZE = 9
_BOX = 3

Board = Sequence[Sequence[Any]]


@dataclass(frozen=True)
class UnitRule:
    name: str
    cells: Callable[[int], List[Tuple[int, int]]]


def _row_cells(i: int) -> List[Tuple[int, int]]:
    return [(i, j) for j in range(_SIZE)]


def _col_cells(i: int) -> List[Tuple[int, int]]:
    return [(j, i) for j in range(_SIZE)]


def _block_cells(i: int) -> List[Tuple[int, int]]:
    r0 = i // _BOX * _BOX
    c0 = i % _BOX * _BOX
    return [(r0 + j // _BOX, c0 + j % _BOX) for j in range(_SIZE)]


RULES: Tuple[UnitRule, ...] = (
    UnitRule("rows", _row_cells),
    UnitRule("cols", _col_cells),
    UnitRule("blocks", _block_cells),
)


def _is_blank(value: Any, blanks: Iterable[Any]) -> bool:
    return value is None or value in blanks


def default_blanks() -> Tuple[Any, ...]:
    """Values treated as empty cells: ``0``, the empty string and the configured placeholder."""

    return (0, "", str(get_section("PUZZLE.placeholder", "?")))


def _shape_issues(board: Board) -> List[ValidationIssue]:
    if len(board) != _SIZE:
        return [make_error("shape.rows", f"board has {len(board)} rows, expected {_SIZE}", "$")]
    issues = []
    for r, row in enumerate(board):
        if len(row) != _SIZE:
            issues.append(make_error("shape.cols", f"row has {len(row)} cells, expected {_SIZE}", f"$.rows[{r}]"))
    return issues


def _unit_issues(board: Board, rule: UnitRule, blanks: Tuple[Any, ...]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for i in range(_SIZE):
        seen = set()
        for r, c in rule.cells(i):
            value = board[r][c]
            if _is_blank(value, blanks):
                continue
            if value in seen:
                issues.append(
                    make_error(
                        f"invariant.board.duplicate_in_{rule.name}",
                        f"value {value!r} repeated at ({r}, {c})",
                        f"$.{rule.name}[{i}]",
                    )
                )
            seen.add(value)
    return issues


def validate_board(board: Board, *, blanks: Optional[Tuple[Any, ...]] = None) -> ValidationReport:
    """Scan every row, column and block for repeated values.

    Cells equal to one of ``blanks`` (or ``None``) are ignored, so masked boards
    can be checked as well as completed ones.  Without ``blanks`` the
    configured placeholder is read at call time.
    """

    if blanks is None:
        blanks = default_blanks()
    started = time.perf_counter()
    errors = _shape_issues(board)
    if not errors:
        for rule in RULES:
            errors.extend(_unit_issues(board, rule, blanks))
    elapsed = int((time.perf_counter() - started) * 1000)
    return ValidationReport(ok=not errors, errors=errors, warnings=[], timings_ms={"scan": elapsed})


def is_valid_board(board: Board, *, blanks: Optional[Tuple[Any, ...]] = None) -> bool:
    return validate_board(board, blanks=blanks).ok


def assert_valid_board(board: Board, *, blanks: Optional[Tuple[Any, ...]] = None) -> ValidationReport:
    """Return the report, raising :class:`PostGenerationValidityFailure` on duplicates."""

    report = validate_board(board, blanks=blanks)
    if not report.ok:
        raise PostGenerationValidityFailure(report)
    return report


__all__ = ["RULES", "UnitRule", "assert_valid_board", "default_blanks", "is_valid_board", "validate_board"]
