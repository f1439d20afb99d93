"""Render formulas, atoms and evaluation results back to text."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from sheets._utils import format_natural
from sheets.calc._ast import Atom, Empty, Formula, FormulaAtom, Number, Op, Ref, String
from sheets.calc._functions import ArityErr, DepthErr, FormulaErr, RefErr, TypeErr


def format_number(value: float) -> str:
    """Shortest decimal text that parses back to *value*.

    Always carries a decimal point, since the grammar has no integer literals.
    """
    if not math.isfinite(value):
        return repr(float(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        # 1e+16 -> 10000000000000000.0, 1e-07 -> 0.0000001
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def format_atom(atom: FormulaAtom) -> str:
    if isinstance(atom, Number):
        return format_number(atom.value)
    if isinstance(atom, String):
        return f'"{atom.value}"'
    if isinstance(atom, Empty):
        return ""
    raise TypeError(f"Not a formula atom: {atom!r}")


def format_formula(formula: Formula) -> str:
    """Render *formula* in the syntax accepted by ``parse_formula``.

    String atoms are not escaped, so a string containing ``"`` does not
    survive a round trip.
    """
    if not isinstance(formula, (Atom, Ref, Op)):
        raise TypeError(f"Not a formula: {formula!r}")
    parts: list[str] = []
    # Pending nodes and literal text, popped in output order
    stack: list[Formula | str] = [formula]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Atom):
            parts.append(format_atom(item.atom))
        elif isinstance(item, Ref):
            parts.append(format_natural(item.coord))
        elif isinstance(item, Op):
            stack.append(")")
            for i in range(len(item.args) - 1, -1, -1):
                stack.append(item.args[i])
                if i:
                    stack.append(", ")
            stack.append(f"{item.op.keyword}(")
        else:
            raise TypeError(f"Not a formula: {item!r}")
    return "".join(parts)


def format_error(err: FormulaErr) -> str:
    """Short display text for an evaluation error, e.g. ``#REF!(A1)``."""
    if isinstance(err, RefErr):
        return f"#REF!({format_natural(err.coord)})"
    if isinstance(err, TypeErr):
        return f"#TYPE!({err.expected})"
    if isinstance(err, ArityErr):
        return f"#ARITY!({err.minimum})"
    if isinstance(err, DepthErr):
        return f"#DEPTH!({err.limit})"
    raise TypeError(f"Not a formula error: {err!r}")


def format_result(value: Any) -> str:
    """Display text for a ``Sheet.value`` result.

    Strings are shown without quotes; numbers and errors as above.
    """
    if isinstance(value, FormulaErr):
        return format_error(value)
    if isinstance(value, String):
        return value.value
    return format_atom(value)
