"""Formula parser: lark LALR grammar producing the ``_ast`` node types.

Formula text is one of::

    "text"                  string literal (no escapes)
    -12.5  .5               number; the decimal point is mandatory
    B7  AJ4                 cell reference
    add(A1, 2.0, sub(B1, 1.0))
                            operator application (add, sub, mul, div, avg)

Whitespace is only allowed after an argument comma.
"""

from __future__ import annotations

import logging
from typing import Any

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from sheets._utils import parse_coord
from sheets.calc._ast import EMPTY_FORMULA, Atom, Formula, FormulaOp, Number, Op, Ref, String

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

GRAMMAR = r"""
start: formula

?formula: string
    | number
    | ref
    | op

string: STRING
number: NUMBER
ref: REF
op: OP_NAME "(" formula (_ARG_DELIM formula)* ")"

STRING: /"[^"]*"/
NUMBER: /-?[0-9]*\.[0-9]+/
REF: /[A-Z]+[1-9][0-9]*/
OP_NAME: "add" | "sub" | "mul" | "div" | "avg"
_ARG_DELIM: /,[ \t]*/
"""


class FormulaParseError(ValueError):
    """Formula text that does not match the grammar.

    Attributes:
        text: The rejected input.
        position: 0-based offset of the first offending character.
        expected: Sorted grammar terminal names that would have been accepted.
    """

    def __init__(self, text: str, position: int, expected: list[str]) -> None:
        self.text = text
        self.position = position
        self.expected = expected
        msg = f"Invalid formula {text!r} at position {position}"
        if expected:
            msg += f": expected one of {', '.join(expected)}"
        super().__init__(msg)


class _ToFormula(Transformer):
    """Builds AST nodes while the LALR parser reduces."""

    def start(self, children: list[Formula]) -> Formula:
        return children[0]

    def string(self, children: list[Token]) -> Formula:
        return Atom(String(str(children[0])[1:-1]))

    def number(self, children: list[Token]) -> Formula:
        return Atom(Number(float(children[0])))

    def ref(self, children: list[Token]) -> Formula:
        # REF only matches well-formed natural coordinates
        return Ref(parse_coord(str(children[0])))

    def op(self, children: list[Any]) -> Formula:
        name, *args = children
        return Op(FormulaOp(str(name)), tuple(args))


_parser = Lark(GRAMMAR, parser="lalr", start="start", transformer=_ToFormula())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _describe_error(exc: UnexpectedInput, text: str) -> tuple[int, list[str]]:
    """(0-based position, sorted expected terminals) for a lark error."""
    if isinstance(exc, UnexpectedCharacters):
        return exc.pos_in_stream, sorted(exc.allowed or ())
    if isinstance(exc, UnexpectedEOF):
        return len(text), sorted(exc.expected)
    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            return len(text), sorted(exc.expected)
        return exc.token.start_pos, sorted(exc.expected)
    return len(text), []


def parse_formula(text: str) -> Formula:
    """Parse formula text into a Formula tree.

    Empty text is an empty cell and never reaches the grammar.

    Raises:
        FormulaParseError: If *text* is not a complete formula.
    """
    if not text:
        return EMPTY_FORMULA
    try:
        return _parser.parse(text)
    except UnexpectedInput as exc:
        logger.debug("Cannot parse formula %r: %s", text, exc)
        position, expected = _describe_error(exc, text)
        raise FormulaParseError(text, position, expected) from exc
