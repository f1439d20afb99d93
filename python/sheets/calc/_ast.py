"""Formula syntax tree: atoms, references and operator applications.

Every node is a frozen dataclass, so a stored formula can be handed out
without copying.  The node set is closed; consumers dispatch with
``isinstance`` over the variants listed in ``FormulaAtom`` and ``Formula``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from sheets._utils import Coord

# ---------------------------------------------------------------------------
# Atoms
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Empty:
    """A cell with no content."""

    def __repr__(self) -> str:
        return "EMPTY"


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class String:
    value: str


EMPTY = Empty()

FormulaAtom = Union[Empty, Number, String]


# ---------------------------------------------------------------------------
# Formula nodes
# ---------------------------------------------------------------------------


class FormulaOp(Enum):
    """Operators; each value is the keyword used in formula text."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    AVG = "avg"

    @property
    def keyword(self) -> str:
        return self.value


@dataclass(frozen=True)
class Atom:
    atom: FormulaAtom


@dataclass(frozen=True)
class Ref:
    coord: Coord


@dataclass(frozen=True)
class Op:
    """Operator application.  Argument order matters for SUB, DIV and errors."""

    op: FormulaOp
    args: tuple[Formula, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but always store an immutable tuple
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))


Formula = Union[Atom, Ref, Op]

EMPTY_FORMULA = Atom(EMPTY)


def is_empty_formula(formula: Formula) -> bool:
    return isinstance(formula, Atom) and isinstance(formula.atom, Empty)

