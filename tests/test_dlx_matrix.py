from __future__ import annotations

from dlx.matrix import (
    COLUMN_COUNT,
    HEADER,
    ExactCoverMatrix,
    block_of,
    candidate_id,
    column_name,
    constraint_columns,
)


def test_fresh_matrix_shape() -> None:
    matrix = ExactCoverMatrix()
    columns = list(matrix.active_columns())
    assert len(columns) == COLUMN_COUNT
    assert columns == list(range(1, COLUMN_COUNT + 1))
    assert all(matrix.size[col] == 9 for col in columns)
    assert matrix.node_count == 729 * 4
    assert not matrix.is_empty()


def test_constraint_indices_follow_layout() -> None:
    assert block_of(4, 7) == 5
    assert constraint_columns(0, 0, 1) == (0, 81, 162, 243)
    assert constraint_columns(8, 8, 9) == (80, 161, 242, 323)
    assert constraint_columns(4, 7, 3) == (43, 81 + 36 + 2, 162 + 63 + 2, 243 + 45 + 2)
    assert column_name(0) == "cell r0c0"
    assert column_name(81 + 9 + 4) == "row 1 has 5"


def test_every_candidate_row_has_four_linked_nodes() -> None:
    matrix = ExactCoverMatrix()
    seen = set()
    for col in matrix.active_columns():
        for node in matrix.column_rows(col):
            rid = matrix.row_id[node]
            if rid in seen:
                continue
            seen.add(rid)
            row, rest = divmod(rid, 81)
            c, v = divmod(rest, 9)
            nodes = matrix.row_nodes(node)
            assert len(nodes) == 4
            assert {matrix.row_id[n] for n in nodes} == {rid}
            expected = {matrix.column_node(i) for i in constraint_columns(row, c, v + 1)}
            assert {matrix.column[n] for n in nodes} == expected
    assert seen == {candidate_id(r, c, v) for r in range(9) for c in range(9) for v in range(1, 10)}


def test_row_nodes_are_appended_in_column_order() -> None:
    matrix = ExactCoverMatrix()
    cell = matrix.column_node(0)
    ids = [matrix.row_id[n] for n in matrix.column_rows(cell)]
    assert ids == list(range(9))
    assert matrix.column[matrix.up[cell]] == cell
    assert matrix.row_id[matrix.up[cell]] == 8


def test_cover_detaches_column_and_dependent_nodes() -> None:
    matrix = ExactCoverMatrix()
    cell = matrix.column_node(0)
    matrix.cover(cell)

    assert cell not in set(matrix.active_columns())
    for value in range(9):
        assert matrix.size[matrix.column_node(81 + value)] == 8
        assert matrix.size[matrix.column_node(162 + value)] == 8
        assert matrix.size[matrix.column_node(243 + value)] == 8
    assert matrix.size[matrix.column_node(1)] == 9
    # the covered column keeps its own rows for the later uncover
    assert len(matrix.column_rows(cell)) == 9


def test_cover_then_uncover_restores_every_column() -> None:
    matrix = ExactCoverMatrix()
    before = matrix.snapshot()
    for col in range(1, COLUMN_COUNT + 1):
        matrix.cover(col)
        assert matrix.snapshot() != before
        matrix.uncover(col)
        assert matrix.snapshot() == before


def test_round_trip_holds_in_a_partially_covered_state() -> None:
    matrix = ExactCoverMatrix()
    # Select candidate (0, 0) = 1 the way the search does.
    col = matrix.column_node(0)
    matrix.cover(col)
    row = matrix.down[col]
    node = matrix.right[row]
    while node != row:
        matrix.cover(matrix.column[node])
        node = matrix.right[node]

    state = matrix.snapshot()
    for active in list(matrix.active_columns()):
        matrix.cover(active)
        matrix.uncover(active)
        assert matrix.snapshot() == state


def test_nested_covers_undo_in_reverse_order() -> None:
    matrix = ExactCoverMatrix()
    before = matrix.snapshot()
    order = [matrix.column_node(i) for i in (0, 100, 200, 300)]
    for col in order:
        matrix.cover(col)
    for col in reversed(order):
        matrix.uncover(col)
    assert matrix.snapshot() == before


def test_header_chain_empties_after_covering_everything() -> None:
    matrix = ExactCoverMatrix()
    columns = list(matrix.active_columns())
    for col in columns:
        matrix.cover(col)
    assert matrix.is_empty()
    assert matrix.right[HEADER] == HEADER
    for col in reversed(columns):
        matrix.uncover(col)
    assert len(list(matrix.active_columns())) == COLUMN_COUNT
