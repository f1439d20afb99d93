"""sheets.calc - Formula language and evaluation engine."""

from sheets.calc._ast import (
    EMPTY,
    EMPTY_FORMULA,
    Atom,
    Empty,
    Formula,
    FormulaAtom,
    FormulaOp,
    Number,
    Op,
    Ref,
    String,
)
from sheets.calc._evaluator import DEFAULT_MAX_DEPTH, FormulaEvaluator
from sheets.calc._format import format_atom, format_error, format_formula, format_result
from sheets.calc._functions import (
    ArityErr,
    DepthErr,
    FormulaErr,
    OperatorRegistry,
    RefErr,
    TypeErr,
    is_error,
)
from sheets.calc._parser import FormulaParseError, parse_formula
from sheets.calc._protocol import CellResult, CellValue, FormulaSource

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "EMPTY",
    "EMPTY_FORMULA",
    "ArityErr",
    "Atom",
    "CellResult",
    "CellValue",
    "DepthErr",
    "Empty",
    "Formula",
    "FormulaAtom",
    "FormulaErr",
    "FormulaEvaluator",
    "FormulaOp",
    "FormulaParseError",
    "FormulaSource",
    "Number",
    "Op",
    "OperatorRegistry",
    "Ref",
    "RefErr",
    "String",
    "TypeErr",
    "format_atom",
    "format_error",
    "format_formula",
    "format_result",
    "is_error",
    "parse_formula",
]
