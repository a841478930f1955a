"""Recursive-descent parser: tokens to an immutable parse tree.

Grammar, lowest precedence first:

    expression := term (('+' | '-') term)*        left-associative
    term       := power (('×' | '÷') power)*      left-associative
    power      := unary ('^' power)?              right-associative
    unary      := '-' unary | '√' unary | atom
    atom       := Number | '(' expression ')'

The only parser state is the token cursor, which only moves forward.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from calcengine.config import Settings
from calcengine.errors import NumericOverflow, ParseError
from calcengine.models import (
    OPERATOR_FOR_TOKEN,
    BinaryOp,
    Literal,
    Node,
    Token,
    TokenKind,
    SquareRoot,
    UnaryMinus,
)
from calcengine.tokenizer import tokenize

logger = logging.getLogger(__name__)

_ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
_MULTIPLICATIVE = (TokenKind.TIMES, TokenKind.DIVIDE)


class Parser:
    """Single-use parser over one token sequence."""

    def __init__(self, tokens: Sequence[Token], max_depth: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    # -- cursor helpers -----------------------------------------------------

    def _peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, *kinds: TokenKind) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind in kinds

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _position(self) -> Optional[int]:
        tok = self._peek()
        return tok.position if tok else None

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Count one level of recursion against max_depth."""
        self._depth += 1
        if self._depth > self._max_depth:
            raise ParseError("Expression nested too deeply", self._position())
        try:
            yield
        finally:
            self._depth -= 1

    # -- grammar ------------------------------------------------------------

    def parse(self) -> Node:
        """Parse the whole token sequence into one tree."""
        if not self._tokens:
            return Literal(0.0)
        try:
            node = self._expression()
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            raise ParseError("Expression nested too deeply", self._position()) from None
        tok = self._peek()
        if tok is not None:
            if tok.kind is TokenKind.RIGHT_PAREN:
                raise ParseError("Unbalanced ')'", tok.position)
            raise ParseError(f"Unexpected {tok.text!r} after expression", tok.position)
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._at(*_ADDITIVE):
            op = OPERATOR_FOR_TOKEN[self._advance().kind]
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._power()
        while self._at(*_MULTIPLICATIVE):
            op = OPERATOR_FOR_TOKEN[self._advance().kind]
            node = BinaryOp(op, node, self._power())
        return node

    def _power(self) -> Node:
        base = self._unary()
        if not self._at(TokenKind.CARET):
            return base
        op = OPERATOR_FOR_TOKEN[self._advance().kind]
        with self._nested():
            exponent = self._power()
        return BinaryOp(op, base, exponent)

    def _unary(self) -> Node:
        if self._at(TokenKind.MINUS):
            self._advance()
            with self._nested():
                return UnaryMinus(self._unary())
        if self._at(TokenKind.SQRT):
            self._advance()
            with self._nested():
                return SquareRoot(self._unary())
        return self._atom()

    def _atom(self) -> Node:
        tok = self._peek()
        if tok is None:
            raise ParseError("Missing operand", None)

        if tok.kind is TokenKind.NUMBER:
            self._advance()
            return _number_literal(tok)

        if tok.kind is TokenKind.LEFT_PAREN:
            self._advance()
            with self._nested():
                node = self._expression()
            if not self._at(TokenKind.RIGHT_PAREN):
                raise ParseError(f"Unbalanced '(' opened at position {tok.position}", self._position())
            self._advance()
            return node

        raise ParseError(f"Missing operand before {tok.text!r}", tok.position)


def _number_literal(tok: Token) -> Literal:
    try:
        value = float(tok.text)
    except ValueError:
        raise ParseError(f"Malformed number {tok.text!r}", tok.position) from None
    if not math.isfinite(value):
        raise NumericOverflow(f"Number {tok.text} is too large")
    return Literal(value)


def parse_tokens(tokens: Sequence[Token], settings: Optional[Settings] = None) -> Node:
    """Parse an already tokenized expression.

    Raises:
        ParseError: missing operand, unbalanced parenthesis, trailing tokens,
            malformed number, or nesting deeper than settings.max_depth.
        NumericOverflow: a number literal too large for a float.
    """
    settings = settings or Settings.from_env()
    return Parser(tokens, settings.max_depth).parse()


def parse(text: str, settings: Optional[Settings] = None) -> Node:
    """Tokenize and parse display text.

    Empty text is the literal 0.

    Raises:
        LexError: a character outside the display alphabet.
        ParseError: see parse_tokens.
    """
    tree = parse_tokens(tokenize(text), settings)
    logger.debug("parsed %r into %s", text, type(tree).__name__)
    return tree
