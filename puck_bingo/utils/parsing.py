"""
Generic, format-agnostic parsing utilities.

Upstream payloads mix ints, numeric strings and placeholders; these helpers
normalise them without raising.
"""

from __future__ import annotations


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings or "-".
    """
    if value in (None, "", "-"):
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def parse_save_shots(save_shots: str | None) -> tuple[int | None, int | None]:
    """Parse a saveShotsAgainst string (e.g., '25/27') to (saves, shots_against)."""
    if not save_shots:
        return None, None
    try:
        parts = save_shots.split("/")
        if len(parts) == 2:
            return int(parts[0]), int(parts[1])
    except (ValueError, IndexError, AttributeError):
        pass
    return None, None
