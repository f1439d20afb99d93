"""Tests for sheets.calc operator folds and error values."""

from __future__ import annotations

import math

import pytest

from sheets._utils import Coord
from sheets.calc._ast import EMPTY, FormulaOp, Number, String
from sheets.calc._functions import (
    _BUILTINS,
    ArityErr,
    DepthErr,
    FormulaErr,
    OperatorRegistry,
    RefErr,
    TypeErr,
    is_error,
)


def _nums(*values: float) -> list[Number]:
    return [Number(v) for v in values]


class TestErrorValues:
    def test_equal_by_value(self) -> None:
        assert RefErr(Coord(0, 1)) == RefErr(Coord(0, 1))
        assert TypeErr("Number") == TypeErr("Number")

    def test_variants_differ(self) -> None:
        assert ArityErr(1) != DepthErr(1)

    def test_is_error(self) -> None:
        assert is_error(ArityErr(1))
        assert not is_error(Number(1.0))
        assert not is_error(EMPTY)

    def test_all_subclass_formula_err(self) -> None:
        for err in (RefErr(Coord(0, 0)), TypeErr("Number"), ArityErr(1), DepthErr(5)):
            assert isinstance(err, FormulaErr)


class TestFolds:
    def test_add(self) -> None:
        assert _BUILTINS[FormulaOp.ADD](_nums(1.0, 2.0, 3.5)) == Number(6.5)

    def test_sub_seeds_with_first_argument(self) -> None:
        assert _BUILTINS[FormulaOp.SUB](_nums(4.0, 3.0, 2.0)) == Number(-1.0)

    def test_single_argument_is_identity(self) -> None:
        for op in (FormulaOp.ADD, FormulaOp.SUB, FormulaOp.MUL, FormulaOp.DIV, FormulaOp.AVG):
            assert _BUILTINS[op](_nums(7.0)) == Number(7.0)

    def test_mul(self) -> None:
        assert _BUILTINS[FormulaOp.MUL](_nums(2.0, 3.0, 4.0)) == Number(24.0)

    def test_div_left_to_right(self) -> None:
        assert _BUILTINS[FormulaOp.DIV](_nums(100.0, 5.0, 2.0)) == Number(10.0)

    def test_avg(self) -> None:
        assert _BUILTINS[FormulaOp.AVG](_nums(10.0, 2.0, 3.0)) == Number(5.0)

    @pytest.mark.parametrize("op", list(FormulaOp))
    def test_no_arguments_is_arity_error(self, op: FormulaOp) -> None:
        assert _BUILTINS[op]([]) == ArityErr(1)

    @pytest.mark.parametrize("op", list(FormulaOp))
    def test_string_argument_is_type_error(self, op: FormulaOp) -> None:
        assert _BUILTINS[op]([Number(1.0), String("x")]) == TypeErr("Number")

    def test_empty_argument_is_type_error(self) -> None:
        assert _BUILTINS[FormulaOp.ADD]([EMPTY, Number(1.0)]) == TypeErr("Number")


class TestDivision:
    def test_by_zero_is_infinite(self) -> None:
        assert _BUILTINS[FormulaOp.DIV](_nums(1.0, 0.0)) == Number(math.inf)
        assert _BUILTINS[FormulaOp.DIV](_nums(-1.0, 0.0)) == Number(-math.inf)

    def test_by_negative_zero(self) -> None:
        assert _BUILTINS[FormulaOp.DIV](_nums(1.0, -0.0)) == Number(-math.inf)

    def test_zero_by_zero_is_nan(self) -> None:
        result = _BUILTINS[FormulaOp.DIV](_nums(0.0, 0.0))
        assert isinstance(result, Number)
        assert math.isnan(result.value)


class TestOperatorRegistry:
    def test_builtins_registered(self) -> None:
        reg = OperatorRegistry()
        for op in FormulaOp:
            assert reg.apply(op, [Number(6.0), Number(2.0)]) == _BUILTINS[op]([Number(6.0), Number(2.0)])

    def test_apply(self) -> None:
        reg = OperatorRegistry()
        assert reg.apply(FormulaOp.ADD, _nums(1.0, 2.0)) == Number(3.0)

    def test_custom_registration(self) -> None:
        reg = OperatorRegistry()
        reg.register(FormulaOp.AVG, lambda args: Number(42.0))
        assert reg.apply(FormulaOp.AVG, []) == Number(42.0)

    def test_registration_is_per_instance(self) -> None:
        reg = OperatorRegistry()
        reg.register(FormulaOp.ADD, lambda args: Number(0.0))
        assert OperatorRegistry().apply(FormulaOp.ADD, _nums(1.0)) == Number(1.0)
