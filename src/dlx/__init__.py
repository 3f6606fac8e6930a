"""Dancing-links exact-cover engine for 9x9 Sudoku."""

from .extract import Grid, decode_candidate, extract_grid
from .matrix import ExactCoverMatrix
from .search import DLXSearch, SearchStats

__all__ = [
    "DLXSearch",
    "ExactCoverMatrix",
    "Grid",
    "SearchStats",
    "decode_candidate",
    "extract_grid",
]
