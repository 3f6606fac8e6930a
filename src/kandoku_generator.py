# kandoku_generator.py
# Generate complete boards with the dancing-links engine.

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from dlx import DLXSearch, ExactCoverMatrix, SearchStats, extract_grid

Grid = List[List[int]]

# ---------- Utils ----------

def to_string(g: Grid) -> str:
    return ''.join(str(g[r][c] or 0) for r in range(9) for c in range(9))

# ---------- Full solution generator ----------


def solve_cover(rng: Optional[random.Random] = None) -> Tuple[List[int], SearchStats]:
    """Run one search over a fresh matrix and return the selected ids and counters."""

    matrix = ExactCoverMatrix()
    search = DLXSearch(matrix, rng)
    ids = search.solve()
    return ids, search.stats


def generate_solution(rng: Optional[random.Random] = None) -> Grid:
    """Return a random completed 9x9 board.

    Pass a seeded ``random.Random`` for a reproducible board; without one each
    call draws from fresh entropy.
    """

    ids, _ = solve_cover(rng)
    return extract_grid(ids)


__all__ = [
    "Grid",
    "generate_solution",
    "solve_cover",
    "to_string",
]
