from __future__ import annotations

import pytest

from contracts.errors import ConstructionInvariantViolation
from dlx import decode_candidate, extract_grid
from dlx.matrix import candidate_id


def test_decode_candidate_corners() -> None:
    assert decode_candidate(0) == (0, 0, 1)
    assert decode_candidate(728) == (8, 8, 9)
    assert decode_candidate(3 * 81 + 4 * 9 + 4) == (3, 4, 5)


def test_decode_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        decode_candidate(729)
    with pytest.raises(ValueError):
        decode_candidate(-1)


def test_extract_grid_places_every_value(valid_grid) -> None:
    ids = [candidate_id(r, c, valid_grid[r][c]) for r in range(9) for c in range(9)]
    ids.reverse()
    assert extract_grid(ids) == valid_grid


def test_extract_grid_rejects_duplicate_cell(valid_grid) -> None:
    ids = [candidate_id(r, c, valid_grid[r][c]) for r in range(9) for c in range(9)]
    ids[-1] = candidate_id(0, 0, 9)
    with pytest.raises(ConstructionInvariantViolation):
        extract_grid(ids)


def test_extract_grid_rejects_short_cover(valid_grid) -> None:
    ids = [candidate_id(r, c, valid_grid[r][c]) for r in range(9) for c in range(9)]
    with pytest.raises(ConstructionInvariantViolation):
        extract_grid(ids[:-1])
