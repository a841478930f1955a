"""The "=" key contract between the engine and the calculator display.

The UI hands over its current display text and gets back an EqualsOutcome
telling it what to show next:

    SUCCESS    the formatted result
    UNDEFINED  the error sentinel ("Error"); the UI resets to "0" on the next key
    INVALID    the original text, untouched, so the user can keep editing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from calcengine.config import Settings
from calcengine.errors import SemanticError, StructuralError
from calcengine.evaluator import evaluate
from calcengine.parser import parse

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """How the display should react to "="."""

    SUCCESS = "success"
    UNDEFINED = "undefined"
    INVALID = "invalid"


@dataclass(frozen=True)
class EqualsOutcome:
    """Result of pressing "=" on some display text."""

    kind: OutcomeKind
    text: str
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


def format_result(value: float) -> str:
    """Format a result the way the display shows it.

    Integral values drop the fractional part ("14", not "14.0"); everything
    else uses the shortest text that round-trips, written positionally so the
    display can keep editing it ("0.0000001", not "1e-07").
    """
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def press_equals(text: str, settings: Optional[Settings] = None) -> EqualsOutcome:
    """Parse and evaluate the display text, mapping failures to outcomes."""
    settings = settings or Settings.from_env()
    source = "0" if text == settings.error_text else text

    try:
        value = evaluate(parse(source, settings))
    except SemanticError as e:
        logger.debug("undefined result for %r: %s", source, e)
        return EqualsOutcome(OutcomeKind.UNDEFINED, settings.error_text, error=str(e))
    except StructuralError as e:
        logger.debug("invalid expression %r: %s", source, e)
        return EqualsOutcome(OutcomeKind.INVALID, text, error=str(e))

    return EqualsOutcome(OutcomeKind.SUCCESS, format_result(value), value=value)
