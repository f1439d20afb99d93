"""Cell coordinates and conversion to/from natural ``A1`` notation."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NATURAL_RE = re.compile(r"([A-Z]+)([1-9][0-9]*)")


@dataclass(frozen=True, order=True)
class Coord:
    """Zero-based (column, row) cell address. ``A1`` is ``Coord(0, 0)``."""

    col: int
    row: int

    def __post_init__(self) -> None:
        if self.col < 0 or self.row < 0:
            raise ValueError(f"Coordinates must be non-negative: ({self.col}, {self.row})")

    @classmethod
    def parse(cls, text: str) -> Coord | None:
        return parse_coord(text)

    def __str__(self) -> str:
        return format_natural(self)


# ---------------------------------------------------------------------------
# Column conversion (bijective base-26)
# ---------------------------------------------------------------------------


def natural_col_to_numeric(letters: str) -> int:
    """Convert column letters to a 0-based index: ``A`` -> 0, ``AA`` -> 26."""
    if not letters:
        raise ValueError("Column letters must not be empty")
    value = 0
    for ch in letters:
        if not "A" <= ch <= "Z":
            raise ValueError(f"Invalid column letters: {letters!r}")
        value = value * 26 + (ord(ch) - ord("A") + 1)
    return value - 1


def numeric_col_to_natural(col: int) -> str:
    """Convert a 0-based column index to letters: 701 -> ``ZZ``, 702 -> ``AAA``."""
    if col < 0:
        raise ValueError(f"Column index must be non-negative: {col}")
    value = col + 1
    letters: list[str] = []
    while value > 0:
        value -= 1
        letters.append(chr(ord("A") + value % 26))
        value //= 26
    return "".join(reversed(letters))


# ---------------------------------------------------------------------------
# Whole coordinates
# ---------------------------------------------------------------------------


def natural_to_numeric(letters: str, row: int) -> Coord:
    """Build a Coord from column letters and a 1-based row number."""
    if row < 1:
        raise ValueError(f"Row number must be >= 1: {row}")
    return Coord(natural_col_to_numeric(letters), row - 1)


def parse_coord(text: str) -> Coord | None:
    """Parse natural notation like ``"AJ4"``; returns None if malformed."""
    m = _NATURAL_RE.fullmatch(text)
    if not m:
        return None
    return natural_to_numeric(m.group(1), int(m.group(2)))


def format_natural(coord: Coord) -> str:
    return f"{numeric_col_to_natural(coord.col)}{coord.row + 1}"
