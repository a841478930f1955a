"""Evaluator: folds a parse tree to one finite float.

The fold is depth-first post-order over an explicit stack, so long operator
chains ("1+1+1+...") cannot exhaust the interpreter's recursion limit. Each
node is applied exactly once.
"""

from __future__ import annotations

import logging
import math

from calcengine.errors import DivisionByZero, DomainError, NumericOverflow
from calcengine.models import BinaryOp, Literal, Node, Operator, SquareRoot, UnaryMinus, children

logger = logging.getLogger(__name__)


def _power(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0:
        raise DivisionByZero(f"0 raised to negative power {exponent:g}")
    try:
        return math.pow(base, exponent)
    except ValueError:
        # math.pow's only remaining ValueError: negative base, fractional exponent
        raise DomainError(f"{base:g} raised to fractional power {exponent:g}") from None
    except OverflowError:
        raise NumericOverflow(f"{base:g}^{exponent:g} is too large") from None


def _apply_binary(op: Operator, left: float, right: float) -> float:
    if op is Operator.ADD:
        return left + right
    if op is Operator.SUB:
        return left - right
    if op is Operator.MUL:
        return left * right
    if op is Operator.DIV:
        if right == 0.0:
            raise DivisionByZero(f"{left:g} divided by zero")
        return left / right
    if op is Operator.POW:
        return _power(left, right)
    raise TypeError(f"Unknown operator: {op!r}")


def _square_root(value: float) -> float:
    if value < 0:
        raise DomainError(f"Square root of negative number {value:g}")
    return math.sqrt(value)


def _checked(value: float, node: Node) -> float:
    if not math.isfinite(value):
        raise NumericOverflow(f"Result of {type(node).__name__} overflowed")
    return value


def evaluate(tree: Node) -> float:
    """Evaluate a parse tree.

    Raises:
        DivisionByZero: a zero divisor, or zero to a negative power.
        DomainError: square root of a negative, or a negative base to a
            fractional power.
        NumericOverflow: any intermediate result leaves the finite range.
    """
    pending: list[tuple[Node, bool]] = [(tree, False)]
    values: list[float] = []

    while pending:
        node, expanded = pending.pop()

        if isinstance(node, Literal):
            values.append(node.value)
            continue

        if not expanded:
            pending.append((node, True))
            # Right pushed first so the left operand folds first.
            for child in reversed(children(node)):
                pending.append((child, False))
            continue

        if isinstance(node, BinaryOp):
            right = values.pop()
            left = values.pop()
            values.append(_checked(_apply_binary(node.op, left, right), node))
        elif isinstance(node, UnaryMinus):
            values.append(-values.pop())
        elif isinstance(node, SquareRoot):
            values.append(_square_root(values.pop()))
        else:
            raise TypeError(f"Unsupported node: {type(node).__name__}")

    result = values.pop()
    logger.debug("evaluated to %r", result)
    return result
