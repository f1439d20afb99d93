"""FormulaEvaluator: depth-first evaluation of stored formulas.

Every call starts from scratch; nothing is cached between or within
evaluations.  Cycle detection follows one reference chain at a time: the
set of cells visited on the current path is an immutable ``frozenset``
recorded with each pending operator, so sibling arguments of an operator
each see only the path that led to the operator.  A cell reached twice
through different siblings (a diamond) is therefore not a cycle.

The walk keeps pending operators on an explicit stack rather than the
interpreter's call stack, so neither deep nesting nor long reference chains
can raise ``RecursionError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sheets._utils import Coord
from sheets.calc._ast import EMPTY, Atom, Formula, FormulaAtom, Op, Ref
from sheets.calc._functions import DepthErr, OperatorRegistry, RefErr, is_error
from sheets.calc._protocol import CellValue, FormulaSource

logger = logging.getLogger(__name__)

# Longest reference chain followed before giving up with DepthErr.
DEFAULT_MAX_DEPTH = 128


@dataclass
class _Pending:
    """An operator whose arguments are being evaluated."""

    node: Op
    visited: frozenset[Coord]
    atoms: list[FormulaAtom] = field(default_factory=list)


class FormulaEvaluator:
    """Evaluates formulas against the cells of a FormulaSource.

    Usage::

        evaluator = FormulaEvaluator(sheet)
        evaluator.value(Coord(5, 5))
        evaluator.evaluate(parse_formula("add(A1, 2.0)"))
    """

    def __init__(
        self,
        source: FormulaSource,
        max_depth: int = DEFAULT_MAX_DEPTH,
        operators: OperatorRegistry | None = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._source = source
        self._max_depth = max_depth
        self._operators = operators if operators is not None else OperatorRegistry()

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def value(self, coord: Coord) -> CellValue:
        """Evaluate the formula stored at *coord* (an empty cell is EMPTY)."""
        formula = self._source.lookup(coord)
        if formula is None:
            return EMPTY
        return self._eval(formula, frozenset())

    def evaluate(self, formula: Formula) -> CellValue:
        """Evaluate a formula that is not stored in the source."""
        return self._eval(formula, frozenset())

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _eval(self, formula: Formula, visited: frozenset[Coord]) -> CellValue:
        pending: list[_Pending] = []
        node, path = formula, visited
        while True:
            result = self._descend(node, path, pending)
            # Unwind finished operators; an error aborts the whole walk
            while True:
                if is_error(result) or not pending:
                    return result
                top = pending[-1]
                top.atoms.append(result)
                if len(top.atoms) < len(top.node.args):
                    # Next sibling starts from the path into the operator
                    node, path = top.node.args[len(top.atoms)], top.visited
                    break
                pending.pop()
                result = self._operators.apply(top.node.op, top.atoms)

    def _descend(
        self, node: Formula, path: frozenset[Coord], pending: list[_Pending],
    ) -> CellValue:
        """Follow refs and first arguments until *node* yields a value."""
        while True:
            if isinstance(node, Atom):
                return node.atom
            if isinstance(node, Ref):
                coord = node.coord
                if coord in path:
                    logger.debug("Circular reference closes at %s", coord)
                    return RefErr(coord)
                if len(path) >= self._max_depth:
                    logger.debug("Reference chain exceeds %d cells at %s", self._max_depth, coord)
                    return DepthErr(self._max_depth)
                target = self._source.lookup(coord)
                if target is None:
                    return EMPTY
                node, path = target, path | {coord}
            elif isinstance(node, Op):
                if not node.args:
                    return self._operators.apply(node.op, [])
                pending.append(_Pending(node, path))
                node = node.args[0]
            else:
                raise TypeError(f"Not a formula: {node!r}")
