"""Exact-cover constraint matrix for 9x9 Sudoku stored as a dancing-links arena.

Every node of the toroidal structure lives in a set of parallel integer lists
(``left``, ``right``, ``up``, ``down``, ``column``, ``row_id``).  Index ``0`` is
the header, indices ``1..324`` are the column nodes and the remaining indices
are candidate nodes, four per candidate row.  Splicing a node in or out only
rewrites integers, so cover/uncover keep their O(1) behaviour without any
object graph.

Column layout (``COLUMN_COUNT`` = 324)::

    0   .. 80    cell-occupied[row, col]
    81  .. 161   row-has-value[row, value]
    162 .. 242   col-has-value[col, value]
    243 .. 323   block-has-value[block, value]

Candidate identifiers are ``row * 81 + col * 9 + (value - 1)``.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

SIZE = 9
BOX = 3
CELLS = SIZE * SIZE
COLUMN_COUNT = 4 * CELLS
CANDIDATE_COUNT = SIZE * SIZE * SIZE
NODES_PER_CANDIDATE = 4

HEADER = 0

_FAMILIES = ("cell", "row", "col", "block")

Snapshot = Tuple[Tuple[int, ...], ...]


def candidate_id(row: int, col: int, value: int) -> int:
    return row * CELLS + col * SIZE + (value - 1)


def block_of(row: int, col: int) -> int:
    return (row // BOX) * BOX + col // BOX


def constraint_columns(row: int, col: int, value: int) -> Tuple[int, int, int, int]:
    """Return the four 0-based constraint indices satisfied by a placement."""

    block = block_of(row, col)
    return (
        row * SIZE + col,
        CELLS + row * SIZE + (value - 1),
        2 * CELLS + col * SIZE + (value - 1),
        3 * CELLS + block * SIZE + (value - 1),
    )


def column_name(index: int) -> str:
    family, offset = divmod(index, CELLS)
    major, minor = divmod(offset, SIZE)
    if family == 0:
        return f"cell r{major}c{minor}"
    return f"{_FAMILIES[family]} {major} has {minor + 1}"


class ExactCoverMatrix:
    """Dancing-links matrix holding all 729 Sudoku placements.

    Columns are addressed by their arena index (``1..324``); use
    :meth:`column_node` to translate a 0-based constraint index.
    """

    def __init__(self) -> None:
        total = 1 + COLUMN_COUNT + CANDIDATE_COUNT * NODES_PER_CANDIDATE
        self.left: List[int] = [0] * total
        self.right: List[int] = [0] * total
        self.up: List[int] = list(range(total))
        self.down: List[int] = list(range(total))
        self.column: List[int] = [0] * total
        self.row_id: List[int] = [-1] * total
        # Only meaningful for the header and the column nodes.
        self.size: List[int] = [0] * (1 + COLUMN_COUNT)
        self.names: List[str] = ["header"] + [column_name(i) for i in range(COLUMN_COUNT)]
        self._next_free = 1 + COLUMN_COUNT
        self._build()

    # ------------------------------------------------------------------ build

    def _build(self) -> None:
        previous = HEADER
        for node in range(1, COLUMN_COUNT + 1):
            self.column[node] = node
            self.right[previous] = node
            self.left[node] = previous
            previous = node
        self.right[previous] = HEADER
        self.left[HEADER] = previous

        for row in range(SIZE):
            for col in range(SIZE):
                for value in range(1, SIZE + 1):
                    self._add_row(
                        candidate_id(row, col, value),
                        [self.column_node(c) for c in constraint_columns(row, col, value)],
                    )

    def _add_row(self, rid: int, columns: List[int]) -> None:
        first = -1
        for col in columns:
            node = self._next_free
            self._next_free += 1
            self.column[node] = col
            self.row_id[node] = rid

            # Append at the tail of the column; up[col] is the current tail.
            tail = self.up[col]
            self.down[node] = col
            self.up[node] = tail
            self.down[tail] = node
            self.up[col] = node
            self.size[col] += 1

            if first < 0:
                first = node
                self.left[node] = node
                self.right[node] = node
            else:
                last = self.left[first]
                self.right[node] = first
                self.left[node] = last
                self.right[last] = node
                self.left[first] = node

    # ------------------------------------------------------- cover / uncover

    def cover(self, col: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        right[left[col]] = right[col]
        left[right[col]] = left[col]
        row = down[col]
        while row != col:
            node = right[row]
            while node != row:
                up[down[node]] = up[node]
                down[up[node]] = down[node]
                self.size[self.column[node]] -= 1
                node = right[node]
            row = down[row]

    def uncover(self, col: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        row = up[col]
        while row != col:
            node = left[row]
            while node != row:
                self.size[self.column[node]] += 1
                up[down[node]] = node
                down[up[node]] = node
                node = left[node]
            row = up[row]
        right[left[col]] = col
        left[right[col]] = col

    # ------------------------------------------------------------ inspection

    @property
    def node_count(self) -> int:
        return self._next_free - 1 - COLUMN_COUNT

    def column_node(self, index: int) -> int:
        """Arena index of the 0-based constraint column ``index``."""

        if not 0 <= index < COLUMN_COUNT:
            raise IndexError(f"constraint column {index} out of range")
        return index + 1

    def column_index(self, name: str) -> int:
        return self.names.index(name)

    def is_empty(self) -> bool:
        return self.right[HEADER] == HEADER

    def active_columns(self) -> Iterator[int]:
        col = self.right[HEADER]
        while col != HEADER:
            yield col
            col = self.right[col]

    def column_rows(self, col: int) -> List[int]:
        rows = []
        node = self.down[col]
        while node != col:
            rows.append(node)
            node = self.down[node]
        return rows

    def row_nodes(self, node: int) -> List[int]:
        """Nodes of ``node``'s candidate row, starting at ``node``."""

        nodes = [node]
        other = self.right[node]
        while other != node:
            nodes.append(other)
            other = self.right[other]
        return nodes

    def snapshot(self) -> Snapshot:
        return (
            tuple(self.left),
            tuple(self.right),
            tuple(self.up),
            tuple(self.down),
            tuple(self.size),
        )


__all__ = [
    "SIZE",
    "BOX",
    "CELLS",
    "COLUMN_COUNT",
    "CANDIDATE_COUNT",
    "HEADER",
    "ExactCoverMatrix",
    "block_of",
    "candidate_id",
    "column_name",
    "constraint_columns",
]
