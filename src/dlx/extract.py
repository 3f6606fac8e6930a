"""Turn selected candidate ids back into a filled grid."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from contracts.errors import ConstructionInvariantViolation

from .matrix import CANDIDATE_COUNT, CELLS, SIZE

Grid = List[List[int]]


def decode_candidate(rid: int) -> Tuple[int, int, int]:
    """Return ``(row, col, value)`` for a candidate id."""

    if not 0 <= rid < CANDIDATE_COUNT:
        raise ValueError(f"candidate id {rid} out of range")
    return rid // CELLS, (rid // SIZE) % SIZE, rid % SIZE + 1


def extract_grid(ids: Iterable[int]) -> Grid:
    grid: Grid = [[0] * SIZE for _ in range(SIZE)]
    placed = 0
    for rid in ids:
        row, col, value = decode_candidate(rid)
        if grid[row][col]:
            raise ConstructionInvariantViolation(f"cell ({row}, {col}) selected twice")
        grid[row][col] = value
        placed += 1
    if placed != CELLS:
        raise ConstructionInvariantViolation(f"cover selected {placed} candidates, expected {CELLS}")
    return grid


__all__ = ["Grid", "decode_candidate", "extract_grid"]
