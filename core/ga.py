"""Group address helpers.

KNX group addresses use the 3-level form main/middle/sub (0-31, 0-7,
0-255).
"""

from __future__ import annotations

MAIN_MAX = 31
MIDDLE_MAX = 7
SUB_MAX = 255

# Number of middle groups available under one main group (0-7)
MIDDLE_GROUP_COUNT = MIDDLE_MAX + 1

LEVEL_RANGES = {
    "main": (0, MAIN_MAX),
    "middle": (0, MIDDLE_MAX),
    "sub": (0, SUB_MAX),
}


def in_range(main: int, middle: int, sub: int) -> bool:
    """Return True if all three levels are inside their KNX ranges."""
    return (
        0 <= main <= MAIN_MAX
        and 0 <= middle <= MIDDLE_MAX
        and 0 <= sub <= SUB_MAX
    )


def parse_group_address(text: str) -> tuple[int, int, int]:
    """Parse "1/2/3" → (1, 2, 3). Raises ValueError on bad input."""
    parts = text.strip().split("/")
    if len(parts) != 3:
        raise ValueError(f"Group address must have 3 levels: {text!r}")
    try:
        main, middle, sub = int(parts[0]), int(parts[1]), int(parts[2])
    except ValueError:
        raise ValueError(f"Group address levels must be integers: {text!r}") from None
    if not in_range(main, middle, sub):
        raise ValueError(f"Group address out of range: {text!r}")
    return main, middle, sub


def format_group_address(main: int, middle: int, sub: int) -> str:
    """Format (1, 2, 3) → "1/2/3"."""
    return f"{main}/{middle}/{sub}"
