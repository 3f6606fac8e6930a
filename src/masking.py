"""Difficulty tiers and cell masking."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Any, Dict, List, Optional, Sequence, Union

from contracts.errors import InvalidDifficultyParameter
from project_config import get_section

CELLS = 81


class Difficulty(IntEnum):
    VeryEasy = 1
    Easy = 2
    Normal = 3
    Hard = 4
    VeryHard = 5
    Extreme = 6
    Spicy = 7
    Insane = 8
    Nightmare = 9
    Unknown = 10


DEFAULT_MASK_COUNTS: Dict[Difficulty, int] = {
    Difficulty.VeryEasy: 39,
    Difficulty.Easy: 47,
    Difficulty.Normal: 51,
    Difficulty.Hard: 54,
    Difficulty.VeryHard: 56,
    Difficulty.Extreme: 58,
    Difficulty.Spicy: 60,
    Difficulty.Insane: 62,
    Difficulty.Nightmare: 63,
    Difficulty.Unknown: 64,
}


def mask_range() -> tuple[int, int]:
    low = int(get_section("difficulty.min_mask_count", 39))
    high = int(get_section("difficulty.max_mask_count", 64))
    return low, high


def default_difficulty() -> Difficulty:
    return parse_difficulty(get_section("difficulty.default", int(Difficulty.Normal)))


def parse_difficulty(value: Union[Difficulty, int, str]) -> Difficulty:
    """Accept a level number (``"3"`` or ``3``), a tier name, or a :class:`Difficulty`."""

    if isinstance(value, Difficulty):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            value = int(text)
        else:
            for member in Difficulty:
                if member.name.lower() == text.lower():
                    return member
            raise InvalidDifficultyParameter(f"unknown difficulty {value!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDifficultyParameter(f"unsupported difficulty {value!r}")
    try:
        return Difficulty(value)
    except ValueError as exc:
        raise InvalidDifficultyParameter(
            f"difficulty {value} outside {int(min(Difficulty))}..{int(max(Difficulty))}"
        ) from exc


def check_mask_count(count: int) -> int:
    low, high = mask_range()
    if isinstance(count, bool) or not isinstance(count, int) or not low <= count <= high:
        raise InvalidDifficultyParameter(f"mask count {count!r} outside {low}..{high}")
    return count


def mask_count_for(difficulty: Union[Difficulty, int, str]) -> int:
    level = parse_difficulty(difficulty)
    configured = get_section("difficulty.mask_counts", {})
    count = configured.get(level.name, DEFAULT_MASK_COUNTS[level])
    return check_mask_count(int(count))


def mask_board(
    board: Sequence[Sequence[Any]],
    difficulty: Union[Difficulty, int, str, None] = None,
    *,
    mask_count: Optional[int] = None,
    rng: Optional[random.Random] = None,
    blank: Any = None,
) -> List[List[Any]]:
    """Return a copy of ``board`` with ``mask_count`` cells blanked.

    Either ``difficulty`` or ``mask_count`` must be given; the count is
    validated before any cell is touched.  ``blank`` defaults to ``0`` for
    integer boards and to the placeholder token for symbol boards.
    """

    if mask_count is None:
        if difficulty is None:
            raise InvalidDifficultyParameter("either difficulty or mask_count is required")
        count = mask_count_for(difficulty)
    else:
        count = check_mask_count(mask_count)

    if blank is None:
        blank = 0 if isinstance(board[0][0], int) else str(get_section("PUZZLE.placeholder", "?"))

    rng = rng if rng is not None else random.Random()
    masked = [list(row) for row in board]
    for pos in rng.sample(range(CELLS), count):
        masked[pos // 9][pos % 9] = blank
    return masked


__all__ = [
    "DEFAULT_MASK_COUNTS",
    "Difficulty",
    "check_mask_count",
    "default_difficulty",
    "mask_board",
    "mask_count_for",
    "mask_range",
    "parse_difficulty",
]
