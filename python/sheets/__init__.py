"""sheets - a minimal spreadsheet formula engine.

Usage::

    from sheets import Coord, Sheet, parse_formula, format_formula

    sheet = Sheet()
    sheet.set(Coord(0, 2), parse_formula("15.0"))
    sheet.set(Coord(5, 5), parse_formula("add(1.0, sub(A3, 3.0), 4.6)"))
    sheet.value(Coord(5, 5))            # Number(value=17.6)
    format_formula(sheet.get(Coord(5, 5)))
"""

from sheets._sheet import Sheet
from sheets._utils import (
    Coord,
    format_natural,
    natural_col_to_numeric,
    natural_to_numeric,
    numeric_col_to_natural,
    parse_coord,
)
from sheets.calc import (
    EMPTY,
    ArityErr,
    Atom,
    CellResult,
    DepthErr,
    Empty,
    Formula,
    FormulaAtom,
    FormulaErr,
    FormulaOp,
    FormulaParseError,
    Number,
    Op,
    Ref,
    RefErr,
    String,
    TypeErr,
    format_formula,
    format_result,
    parse_formula,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "EMPTY",
    "ArityErr",
    "Atom",
    "CellResult",
    "Coord",
    "DepthErr",
    "Empty",
    "Formula",
    "FormulaAtom",
    "FormulaErr",
    "FormulaOp",
    "FormulaParseError",
    "Number",
    "Op",
    "Ref",
    "RefErr",
    "Sheet",
    "String",
    "TypeErr",
    "format_formula",
    "format_natural",
    "format_result",
    "natural_col_to_numeric",
    "natural_to_numeric",
    "numeric_col_to_natural",
    "parse_coord",
    "parse_formula",
]
