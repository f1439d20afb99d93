"""Evaluation error values and operator implementations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from sheets._utils import Coord
from sheets.calc._ast import FormulaAtom, FormulaOp, Number

# ---------------------------------------------------------------------------
# FormulaErr: error values returned (never raised) by evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormulaErr:
    """Base class for evaluation errors.  Compare by value."""


@dataclass(frozen=True)
class RefErr(FormulaErr):
    """Circular reference; *coord* is the cell where the cycle closes."""

    coord: Coord


@dataclass(frozen=True)
class TypeErr(FormulaErr):
    """An operand was not of the *expected* atom kind."""

    expected: str


@dataclass(frozen=True)
class ArityErr(FormulaErr):
    """An operator got fewer than *minimum* arguments."""

    minimum: int


@dataclass(frozen=True)
class DepthErr(FormulaErr):
    """The reference chain is longer than *limit* cells."""

    limit: int


def is_error(val: Any) -> bool:
    """Return True if *val* is a FormulaErr instance."""
    return isinstance(val, FormulaErr)


# ---------------------------------------------------------------------------
# Numeric folds
# ---------------------------------------------------------------------------


def _numbers(args: Sequence[FormulaAtom]) -> list[float] | FormulaErr:
    if len(args) < 1:
        return ArityErr(1)
    nums: list[float] = []
    for arg in args:
        if not isinstance(arg, Number):
            return TypeErr("Number")
        nums.append(arg.value)
    return nums


def _divide(a: float, b: float) -> float:
    # IEEE 754 semantics instead of ZeroDivisionError
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _fold(binary: Callable[[float, float], float]) -> Callable[[Sequence[FormulaAtom]], FormulaAtom | FormulaErr]:
    """Left fold over Number arguments, seeded with the first argument."""

    def apply(args: Sequence[FormulaAtom]) -> FormulaAtom | FormulaErr:
        nums = _numbers(args)
        if isinstance(nums, FormulaErr):
            return nums
        acc = nums[0]
        for x in nums[1:]:
            acc = binary(acc, x)
        return Number(acc)

    return apply


_op_add = _fold(lambda a, b: a + b)
_op_sub = _fold(lambda a, b: a - b)
_op_mul = _fold(lambda a, b: a * b)
_op_div = _fold(_divide)


def _op_avg(args: Sequence[FormulaAtom]) -> FormulaAtom | FormulaErr:
    total = _op_add(args)
    if isinstance(total, FormulaErr):
        return total
    return Number(total.value / len(args))


_BUILTINS: dict[FormulaOp, Callable[[Sequence[FormulaAtom]], FormulaAtom | FormulaErr]] = {
    FormulaOp.ADD: _op_add,
    FormulaOp.SUB: _op_sub,
    FormulaOp.MUL: _op_mul,
    FormulaOp.DIV: _op_div,
    FormulaOp.AVG: _op_avg,
}


class OperatorRegistry:
    """Maps each FormulaOp to the function that folds its evaluated arguments.

    Starts with the builtins; individual operators can be replaced.
    """

    def __init__(self) -> None:
        self._operators: dict[FormulaOp, Callable[..., Any]] = dict(_BUILTINS)

    def register(self, op: FormulaOp, func: Callable[[Sequence[FormulaAtom]], Any]) -> None:
        self._operators[op] = func

    def apply(self, op: FormulaOp, args: Sequence[FormulaAtom]) -> FormulaAtom | FormulaErr:
        return self._operators[op](args)
