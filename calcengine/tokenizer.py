"""Tokenizer: display text to a flat list of Tokens.

Single pass, left to right, no backtracking. The accepted alphabet is the
calculator keypad: digits, ".", + - × ÷ ^ √ and parentheses.
"""

from __future__ import annotations

import logging

from calcengine.errors import LexError
from calcengine.models import SYMBOLS, Token, TokenKind

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")

# Keyboard stand-ins accepted by the CLI's --ascii flag.
_ASCII_ALIASES = str.maketrans({"*": "×", "/": "÷", "r": "√"})


def normalize_ascii(text: str) -> str:
    """Map typeable stand-ins (* / r) onto the display alphabet."""
    return text.translate(_ASCII_ALIASES)


def _scan_number(text: str, start: int) -> int:
    """Return the end offset of the number starting at start.

    A number is a maximal run of digits containing at most one "."; a second
    "." ends it. A lone "." is still returned as a (malformed) number.
    """
    pos = start
    seen_dot = False
    while pos < len(text):
        ch = text[pos]
        if ch in _DIGITS:
            pos += 1
        elif ch == "." and not seen_dot:
            seen_dot = True
            pos += 1
        else:
            break
    return pos


def tokenize(text: str) -> list[Token]:
    """Split display text into tokens.

    Raises:
        LexError: on any character outside the display alphabet.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in _DIGITS or ch == ".":
            end = _scan_number(text, pos)
            tokens.append(Token(TokenKind.NUMBER, text[pos:end], pos))
            pos = end
            continue
        kind = SYMBOLS.get(ch)
        if kind is None:
            raise LexError(f"Unexpected character {ch!r}", pos)
        tokens.append(Token(kind, ch, pos))
        pos += 1

    logger.debug("tokenized %r into %d tokens", text, len(tokens))
    return tokens
