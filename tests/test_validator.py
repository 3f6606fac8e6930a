from __future__ import annotations

import random

import pytest

from contracts.errors import SEVERITY_ERROR, PostGenerationValidityFailure
from contracts.validator import assert_valid_board, is_valid_board, validate_board
from kandoku_generator import generate_solution
from masking import Difficulty, mask_board
from symbols import get_alphabet, label_board


def test_valid_board_passes(valid_grid) -> None:
    report = validate_board(valid_grid)
    assert report.ok is True
    assert report.errors == []
    assert "scan" in report.timings_ms


def test_row_duplicate_is_reported(valid_grid) -> None:
    valid_grid[0][0] = valid_grid[0][1]
    report = validate_board(valid_grid)
    assert report.ok is False
    codes = {issue.code for issue in report.errors}
    assert "invariant.board.duplicate_in_rows" in codes
    assert any(issue.path == "$.rows[0]" for issue in report.errors)
    assert all(issue.severity == SEVERITY_ERROR for issue in report.errors)


def test_column_and_block_duplicates_are_reported(valid_grid) -> None:
    # swapping two cells inside one row keeps the row valid
    valid_grid[0][0], valid_grid[0][4] = valid_grid[0][4], valid_grid[0][0]
    report = validate_board(valid_grid)
    codes = {issue.code for issue in report.errors}
    assert "invariant.board.duplicate_in_rows" not in codes
    assert "invariant.board.duplicate_in_cols" in codes
    assert "invariant.board.duplicate_in_blocks" in codes


def test_masked_symbol_board_ignores_placeholders() -> None:
    board = [["?"] * 9 for _ in range(9)]
    board[0][0] = "臨"
    board[8][8] = "臨"
    assert is_valid_board(board)
    board[0][8] = "臨"
    assert not is_valid_board(board)


def test_wrong_shape_is_rejected() -> None:
    report = validate_board([[1, 2, 3]])
    assert not report.ok
    assert report.errors[0].code == "shape.rows"


def test_assert_valid_board_raises_with_report(valid_grid) -> None:
    assert assert_valid_board(valid_grid).ok
    valid_grid[4][4] = valid_grid[4][5]
    with pytest.raises(PostGenerationValidityFailure) as excinfo:
        assert_valid_board(valid_grid)
    assert excinfo.value.report.ok is False
    assert "$.rows[4]" in str(excinfo.value)


def test_configured_placeholder_counts_as_blank(config_file) -> None:
    config_file('[PUZZLE]\nplaceholder = "*"\n')
    board = label_board(generate_solution(random.Random(5)), get_alphabet("kandoku"))
    masked = mask_board(board, Difficulty.VeryEasy, rng=random.Random(6))
    assert sum(row.count("*") for row in masked) == 39
    assert is_valid_board(masked)
    assert validate_board(masked, blanks=("?",)).ok is False
