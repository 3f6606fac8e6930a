"""Symbol alphabets and plain-text board rendering."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from project_config import get_section

DEFAULT_PLACEHOLDER = "?"

_BUILTIN_ALPHABETS = {
    "kandoku": ["臨", "兵", "闘", "者", "皆", "陣", "列", "在", "前"],
    "digits": list("123456789"),
}


def placeholder() -> str:
    return str(get_section("PUZZLE.placeholder", DEFAULT_PLACEHOLDER))


def default_alphabet_name() -> str:
    return str(get_section("PUZZLE.alphabet", "kandoku"))


def available_alphabets() -> List[str]:
    configured = get_section("alphabets", {})
    return sorted(set(_BUILTIN_ALPHABETS) | set(configured))


def get_alphabet(name: Optional[str] = None) -> List[str]:
    """Return the nine symbols of the alphabet called ``name``."""

    key = name or default_alphabet_name()
    configured = get_section("alphabets", {})
    symbols = configured.get(key, _BUILTIN_ALPHABETS.get(key))
    if symbols is None:
        raise KeyError(f"Unknown alphabet '{key}'")
    symbols = [str(s) for s in symbols]
    if len(symbols) != 9 or len(set(symbols)) != 9:
        raise ValueError(f"Alphabet '{key}' must contain nine distinct symbols")
    if placeholder() in symbols:
        raise ValueError(f"Alphabet '{key}' clashes with the placeholder token")
    return symbols


def label_board(grid: Sequence[Sequence[int]], alphabet: Optional[Sequence[str]] = None) -> List[List[str]]:
    """Map values 1..9 to symbols; 0 becomes the placeholder."""

    symbols = list(alphabet) if alphabet is not None else get_alphabet()
    blank = placeholder()
    return [[symbols[v - 1] if v else blank for v in row] for row in grid]


def format_board(board: Sequence[Sequence[Any]]) -> str:
    lines = []
    for row in board:
        lines.append(" ".join(str(cell) if cell else "." for cell in row))
    return "\n".join(lines)


__all__ = [
    "DEFAULT_PLACEHOLDER",
    "available_alphabets",
    "default_alphabet_name",
    "format_board",
    "get_alphabet",
    "label_board",
    "placeholder",
]
