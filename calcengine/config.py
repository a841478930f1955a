"""Engine settings, read from the environment.

Standard library only. CLI options override these.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DEPTH = 100
DEFAULT_ERROR_TEXT = "Error"

_MAX_DEPTH_VAR = "CALCENGINE_MAX_DEPTH"
_ERROR_TEXT_VAR = "CALCENGINE_ERROR_TEXT"


def _positive_int(raw: Optional[str], default: int) -> int:
    """Parse a positive integer, falling back to default on anything else."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """Tunables shared by the parser and the display boundary.

    max_depth bounds prefix-operator and parenthesis nesting so hostile input
    fails with ParseError instead of exhausting the interpreter stack.
    error_text is the sentinel the UI shows for undefined results.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    error_text: str = DEFAULT_ERROR_TEXT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from CALCENGINE_* variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        return cls(
            max_depth=_positive_int(env.get(_MAX_DEPTH_VAR), DEFAULT_MAX_DEPTH),
            error_text=env.get(_ERROR_TEXT_VAR) or DEFAULT_ERROR_TEXT,
        )
