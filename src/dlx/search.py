"""Randomised Algorithm X over an :class:`ExactCoverMatrix`."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from contracts.errors import ConstructionInvariantViolation

from .matrix import HEADER, ExactCoverMatrix


@dataclass
class SearchStats:
    nodes_visited: int = 0
    backtracks: int = 0
    max_depth: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "nodes_visited": self.nodes_visited,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
        }


class DLXSearch:
    """Depth-first exact-cover search with shuffled branch order.

    The matrix is mutated in place.  After a successful :meth:`search` the
    covered state is left as-is; after a failed one the matrix is fully
    restored.
    """

    def __init__(self, matrix: ExactCoverMatrix, rng: Optional[random.Random] = None) -> None:
        self.matrix = matrix
        self.rng = rng if rng is not None else random.Random()
        self.stats = SearchStats()

    def choose_column(self) -> int:
        """Active column with the fewest live rows; the first one wins ties."""

        matrix = self.matrix
        best = matrix.right[HEADER]
        col = matrix.right[best]
        while col != HEADER:
            if matrix.size[col] < matrix.size[best]:
                best = col
            col = matrix.right[col]
        return best

    def shuffle(self, items: List[int]) -> None:
        # Fisher-Yates
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            items[i], items[j] = items[j], items[i]

    def search(self, solution: List[int]) -> bool:
        matrix = self.matrix
        self.stats.max_depth = max(self.stats.max_depth, len(solution))
        if matrix.is_empty():
            return True

        self.stats.nodes_visited += 1

        col = self.choose_column()
        matrix.cover(col)
        rows = matrix.column_rows(col)
        self.shuffle(rows)

        for row in rows:
            solution.append(matrix.row_id[row])
            node = matrix.right[row]
            while node != row:
                matrix.cover(matrix.column[node])
                node = matrix.right[node]

            if self.search(solution):
                return True

            solution.pop()
            node = matrix.left[row]
            while node != row:
                matrix.uncover(matrix.column[node])
                node = matrix.left[node]
            self.stats.backtracks += 1

        matrix.uncover(col)
        return False

    def solve(self) -> List[int]:
        """Return the candidate ids of one exact cover.

        Raises :class:`ConstructionInvariantViolation` when the search is
        exhausted, which cannot happen for a freshly built Sudoku matrix.
        """

        solution: List[int] = []
        if not self.search(solution):
            raise ConstructionInvariantViolation(
                "exact-cover search exhausted every branch of a fresh matrix"
            )
        return solution


__all__ = ["DLXSearch", "SearchStats"]
