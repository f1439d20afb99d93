"""Sheet: sparse cell store with on-demand evaluation.

All access goes through one re-entrant lock, so a Sheet can be shared
between an editing thread and a display thread.  Evaluation may read any
cell, so locking is per sheet rather than per cell.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Union

from sheets._utils import Coord, parse_coord
from sheets.calc._ast import EMPTY_FORMULA, Formula, is_empty_formula
from sheets.calc._evaluator import DEFAULT_MAX_DEPTH, FormulaEvaluator
from sheets.calc._format import format_formula
from sheets.calc._parser import parse_formula
from sheets.calc._protocol import CellResult, CellValue

logger = logging.getLogger(__name__)

CellKey = Union[Coord, str]


def _to_coord(key: CellKey) -> Coord:
    if isinstance(key, Coord):
        return key
    coord = parse_coord(key)
    if coord is None:
        raise ValueError(f"Invalid cell coordinate: {key!r}")
    return coord


class Sheet:
    """A grid of formulas, one per cell, evaluated when read.

    Usage::

        sheet = Sheet()
        sheet["A1"] = "15.0"
        sheet.set(Coord(1, 0), parse_formula("add(A1, 2.5)"))
        sheet.value(Coord(1, 0))   # Number(17.5)
    """

    __slots__ = ("_cells", "_lock", "_evaluator")

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._cells: dict[Coord, Formula] = {}
        self._lock = threading.RLock()
        self._evaluator = FormulaEvaluator(self, max_depth=max_depth)

    @property
    def max_depth(self) -> int:
        return self._evaluator.max_depth

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def set(self, coord: Coord, formula: Formula) -> None:
        """Store *formula* at *coord*; an empty atom clears the cell."""
        with self._lock:
            if is_empty_formula(formula):
                if self._cells.pop(coord, None) is not None:
                    logger.debug("Cleared %s", coord)
                return
            self._cells[coord] = formula
            logger.debug("Set %s", coord)

    def set_text(self, coord: Coord, text: str) -> None:
        """Parse *text* and store it.  On a parse error the cell is unchanged.

        Raises:
            FormulaParseError: If *text* is not a valid formula.
        """
        formula = parse_formula(text)
        self.set(coord, formula)

    def get(self, coord: Coord) -> Formula:
        """The formula stored at *coord*, or an empty atom."""
        with self._lock:
            return self._cells.get(coord, EMPTY_FORMULA)

    def lookup(self, coord: Coord) -> Formula | None:
        with self._lock:
            return self._cells.get(coord)

    def text(self, coord: Coord) -> str:
        """Formula text for editing the cell at *coord*."""
        return format_formula(self.get(coord))

    def clear(self) -> None:
        with self._lock:
            self._cells.clear()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def value(self, coord: Coord) -> CellValue:
        """Evaluate the cell at *coord*.

        Returns a FormulaAtom, or a FormulaErr value for cycles, type
        mismatches, arity and depth errors.
        """
        with self._lock:
            return self._evaluator.value(coord)

    def select(self, start: Coord, end: Coord) -> Iterator[CellResult]:
        """Evaluate every cell in the rectangle spanned by *start* and *end*.

        Corners may be given in any order.  Results come row by row, left to
        right, and are all computed under a single lock acquisition.
        """
        c_min, c_max = min(start.col, end.col), max(start.col, end.col)
        r_min, r_max = min(start.row, end.row), max(start.row, end.row)
        with self._lock:
            results = [
                CellResult(coord, self._evaluator.value(coord))
                for coord in (
                    Coord(c, r)
                    for r in range(r_min, r_max + 1)
                    for c in range(c_min, c_max + 1)
                )
            ]
        return iter(results)

    # ------------------------------------------------------------------
    # Mapping-style access
    # ------------------------------------------------------------------

    def __getitem__(self, key: CellKey) -> CellValue:
        """``sheet['A1']`` -> evaluated value."""
        return self.value(_to_coord(key))

    def __setitem__(self, key: CellKey, formula: Formula | str) -> None:
        """``sheet['A1'] = 'add(B1, 1.0)'``; accepts text or a Formula."""
        coord = _to_coord(key)
        if isinstance(formula, str):
            self.set_text(coord, formula)
        else:
            self.set(coord, formula)

    def __delitem__(self, key: CellKey) -> None:
        self.set(_to_coord(key), EMPTY_FORMULA)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (Coord, str)):
            return False
        coord = key if isinstance(key, Coord) else parse_coord(key)
        if coord is None:
            return False
        with self._lock:
            return coord in self._cells

    def __len__(self) -> int:
        with self._lock:
            return len(self._cells)

    def __iter__(self) -> Iterator[Coord]:
        """Occupied coordinates in (column, row) order."""
        with self._lock:
            coords = sorted(self._cells)
        return iter(coords)

    def __repr__(self) -> str:
        return f"Sheet(cells={len(self)})"
