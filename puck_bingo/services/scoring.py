"""Bingo grid scoring.

The nine crossed-off flags map row-major onto a 3x3 grid:

    0 1 2
    3 4 5
    6 7 8

Each marked cell is worth one point and each completed line (row, column
or diagonal) adds a three-point bonus.
"""

from __future__ import annotations

from typing import Any

from ..models import TICKET_SIZE, BingoScore

ROWS = ((0, 1, 2), (3, 4, 5), (6, 7, 8))
COLUMNS = ((0, 3, 6), (1, 4, 7), (2, 5, 8))
DIAGONALS = ((0, 4, 8), (2, 4, 6))

LINE_BONUS = 3


def normalize_crossed_off(crossed_off: Any) -> list[bool]:
    """Return the grid as nine bools, or nine False for anything malformed."""
    if (
        isinstance(crossed_off, (list, tuple))
        and len(crossed_off) == TICKET_SIZE
        and all(isinstance(cell, bool) for cell in crossed_off)
    ):
        return list(crossed_off)
    return [False] * TICKET_SIZE


def _completed(grid: list[bool], lines: tuple[tuple[int, int, int], ...]) -> int:
    return sum(1 for line in lines if all(grid[i] for i in line))


def compute_score(crossed_off: Any) -> BingoScore:
    """Score a crossed-off grid.

    Never raises: None, strings, dicts, wrong lengths and non-bool cells all
    score as an empty grid.
    """
    grid = normalize_crossed_off(crossed_off)

    no_crossed_off = sum(grid)
    no_rows = _completed(grid, ROWS)
    no_columns = _completed(grid, COLUMNS)
    no_crosses = _completed(grid, DIAGONALS)

    return BingoScore(
        no_crossed_off=no_crossed_off,
        no_rows=no_rows,
        no_columns=no_columns,
        no_crosses=no_crosses,
        total=no_crossed_off + LINE_BONUS * (no_rows + no_columns + no_crosses),
    )
