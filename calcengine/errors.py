"""Exception hierarchy for calcengine.

Two families, distinguished because the caller reacts differently:

    StructuralError (LexError, ParseError): the text is not a well-formed
        expression. Keep the text so the user can edit it.
    SemanticError (DivisionByZero, DomainError, NumericOverflow): well-formed
        but mathematically undefined. Show "Error".
"""

from __future__ import annotations

from typing import Optional


class CalcError(Exception):
    """Base class for every engine failure."""


class StructuralError(CalcError):
    """The input does not denote a well-formed expression.

    Args:
        message: Human-readable description.
        position: Character offset of the problem, or None at end of input.
    """

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return f"{self.message} at end of input"
        return f"{self.message} at position {self.position}"


class LexError(StructuralError):
    """A character outside the display alphabet."""


class ParseError(StructuralError):
    """Missing operand, unbalanced parenthesis, trailing garbage, bad number."""


class SemanticError(CalcError):
    """The expression is well-formed but has no finite real value."""


class DivisionByZero(SemanticError):
    """Division (or a negative power) with a zero divisor."""


class DomainError(SemanticError):
    """Square root of a negative, or a negative base to a fractional power."""


class NumericOverflow(SemanticError):
    """An intermediate result left the finite float range."""
