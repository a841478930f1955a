"""Data models for the calcengine expression engine.

TokenKind, Token, Operator and the parse tree node types, the typed
structures that flow through tokenizer → parser → evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union


class TokenKind(str, Enum):
    """Lexeme classes of the display alphabet."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    TIMES = "×"
    DIVIDE = "÷"
    CARET = "^"
    SQRT = "√"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


# Single-character symbols; digits and "." are handled by the number scanner.
SYMBOLS: dict[str, TokenKind] = {
    kind.value: kind for kind in TokenKind if kind is not TokenKind.NUMBER
}


@dataclass(frozen=True)
class Token:
    """A classified lexeme and its character offset in the input."""

    kind: TokenKind
    text: str
    position: int

    def __str__(self) -> str:
        return self.text


class Operator(str, Enum):
    """Binary operators, valued by their display symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "×"
    DIV = "÷"
    POW = "^"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def right_associative(self) -> bool:
        return self is Operator.POW


_PRECEDENCE = {
    Operator.ADD: 1,
    Operator.SUB: 1,
    Operator.MUL: 2,
    Operator.DIV: 2,
    Operator.POW: 3,
}

# Prefix operators sit above every binary level.
_PREFIX_PRECEDENCE = 4
_ATOM_PRECEDENCE = 5

OPERATOR_FOR_TOKEN: dict[TokenKind, Operator] = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.TIMES: Operator.MUL,
    TokenKind.DIVIDE: Operator.DIV,
    TokenKind.CARET: Operator.POW,
}


# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------

Piece = Union[str, "Node"]


def _wrap(node: Node, needs_parens: bool) -> list[Piece]:
    return ["(", node, ")"] if needs_parens else [node]


def to_text(node: Node) -> str:
    """Render a tree back to display text, parenthesizing only where required.

    Walks an explicit stack of text pieces, so trees built from long operator
    chains render without touching the recursion limit.
    """
    parts: list[str] = []
    pending: list[Piece] = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        else:
            pending.extend(reversed(item.pieces()))
    return "".join(parts)


@dataclass(frozen=True)
class Literal:
    """A finite numeric constant."""

    value: float

    precedence = _ATOM_PRECEDENCE

    def pieces(self) -> list[Piece]:
        if self.value.is_integer():
            return [str(int(self.value))]
        # Positional form; the display alphabet has no exponent marker.
        return [format(Decimal(repr(self.value)), "f")]

    def to_text(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class BinaryOp:
    """A binary operation owning both operand subtrees."""

    op: Operator
    left: Node
    right: Node

    @property
    def precedence(self) -> int:
        return self.op.precedence

    def pieces(self) -> list[Piece]:
        """Operands and operator, one level deep.

        The left operand needs parens when it binds looser, or equally loose
        under a right-associative operator; the right operand the mirror image.
        """
        p = self.op.precedence
        if self.op.right_associative:
            left_parens = self.left.precedence <= p
            right_parens = self.right.precedence < p
        else:
            left_parens = self.left.precedence < p
            right_parens = self.right.precedence <= p
        return [*_wrap(self.left, left_parens), self.op.value, *_wrap(self.right, right_parens)]

    def to_text(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class UnaryMinus:
    """Prefix negation."""

    operand: Node

    precedence = _PREFIX_PRECEDENCE

    def pieces(self) -> list[Piece]:
        return ["-", *_wrap(self.operand, self.operand.precedence < _PREFIX_PRECEDENCE)]

    def to_text(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class SquareRoot:
    """Prefix square root."""

    operand: Node

    precedence = _PREFIX_PRECEDENCE

    def pieces(self) -> list[Piece]:
        return ["√", *_wrap(self.operand, self.operand.precedence < _PREFIX_PRECEDENCE)]

    def to_text(self) -> str:
        return to_text(self)


Node = Union[Literal, BinaryOp, UnaryMinus, SquareRoot]


def children(node: Node) -> tuple[Node, ...]:
    """Direct operand subtrees, left to right."""
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, (UnaryMinus, SquareRoot)):
        return (node.operand,)
    return ()
