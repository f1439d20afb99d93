"""FormulaSource protocol and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from sheets._utils import Coord
from sheets.calc._ast import Formula, FormulaAtom
from sheets.calc._functions import FormulaErr, is_error

CellValue = Union[FormulaAtom, FormulaErr]


@dataclass(frozen=True)
class CellResult:
    """A single cell's evaluated value, as streamed by ``Sheet.select``."""

    coord: Coord
    value: CellValue

    @property
    def ok(self) -> bool:
        return not is_error(self.value)


@runtime_checkable
class FormulaSource(Protocol):
    """Anything the evaluator can read stored formulas from."""

    def lookup(self, coord: Coord) -> Formula | None:
        """Return the formula stored at *coord*, or None for an empty cell."""
        ...
