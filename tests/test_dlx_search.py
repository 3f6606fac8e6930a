from __future__ import annotations

import random

import pytest

from contracts.errors import ConstructionInvariantViolation
from dlx import DLXSearch, ExactCoverMatrix, decode_candidate


class _RecordingSearch(DLXSearch):
    """Checks the minimum-size rule on every column choice."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.choices = 0

    def choose_column(self) -> int:
        chosen = super().choose_column()
        sizes = [self.matrix.size[col] for col in self.matrix.active_columns()]
        assert self.matrix.size[chosen] == min(sizes)
        assert chosen in set(self.matrix.active_columns())
        self.choices += 1
        return chosen


def _starve_row_columns(matrix: ExactCoverMatrix) -> None:
    # Covering every "col c has 1" column removes every candidate with value 1,
    # leaving the "row r has 1" columns active but empty.
    for col in range(9):
        matrix.cover(matrix.column_node(162 + col * 9))


def test_solution_is_an_exact_cover() -> None:
    ids = DLXSearch(ExactCoverMatrix(), random.Random(1)).solve()
    assert len(ids) == 81
    assert len(set(ids)) == 81
    cells = {decode_candidate(rid)[:2] for rid in ids}
    assert cells == {(r, c) for r in range(9) for c in range(9)}


def test_success_leaves_matrix_fully_covered() -> None:
    matrix = ExactCoverMatrix()
    DLXSearch(matrix, random.Random(2)).solve()
    assert matrix.is_empty()


def test_minimum_column_is_chosen_at_every_level() -> None:
    search = _RecordingSearch(ExactCoverMatrix(), random.Random(3))
    search.solve()
    assert search.choices >= 81


def test_first_minimum_wins_ties() -> None:
    matrix = ExactCoverMatrix()
    assert DLXSearch(matrix).choose_column() == matrix.column_node(0)
    matrix.cover(matrix.column_node(0))
    # row 0 has 1 lost candidate (0, 0, 1) and is now the first column of size 8
    assert DLXSearch(matrix).choose_column() == matrix.column_node(81)


def test_seeded_searches_are_reproducible() -> None:
    first = DLXSearch(ExactCoverMatrix(), random.Random("seed")).solve()
    second = DLXSearch(ExactCoverMatrix(), random.Random("seed")).solve()
    assert first == second


def test_shuffle_is_a_permutation() -> None:
    search = DLXSearch(ExactCoverMatrix(), random.Random(5))
    items = list(range(20))
    search.shuffle(items)
    assert sorted(items) == list(range(20))
    single = [7]
    search.shuffle(single)
    assert single == [7]


def test_empty_column_is_an_immediate_dead_end() -> None:
    matrix = ExactCoverMatrix()
    _starve_row_columns(matrix)
    state = matrix.snapshot()

    search = DLXSearch(matrix, random.Random(6))
    solution: list[int] = []
    assert search.search(solution) is False
    assert solution == []
    assert search.stats.backtracks == 0
    assert matrix.snapshot() == state


def test_exhausted_search_raises_construction_violation() -> None:
    matrix = ExactCoverMatrix()
    _starve_row_columns(matrix)
    with pytest.raises(ConstructionInvariantViolation):
        DLXSearch(matrix, random.Random(7)).solve()


class _DepthCappedSearch(DLXSearch):
    def search(self, solution: list[int]) -> bool:
        if len(solution) >= 3:
            return False
        return super().search(solution)


def test_failed_branches_restore_the_matrix() -> None:
    matrix = ExactCoverMatrix()
    state = matrix.snapshot()

    search = _DepthCappedSearch(matrix, random.Random(8))
    solution: list[int] = []
    assert search.search(solution) is False
    assert solution == []
    assert matrix.snapshot() == state
    assert search.stats.backtracks > 9


def test_stats_are_reported() -> None:
    search = DLXSearch(ExactCoverMatrix(), random.Random(9))
    search.solve()
    stats = search.stats.as_dict()
    assert set(stats) == {"nodes_visited", "backtracks", "max_depth"}
    assert stats["nodes_visited"] >= 81
    assert stats["max_depth"] == 81
