"""Environment-driven settings for selector sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import SelectorConfigError

ESCAPE_TIMEOUT_ENV_VAR = "TERMSELECT_ESCAPE_TIMEOUT"
MAX_VISIBLE_ENV_VAR = "TERMSELECT_MAX_VISIBLE"
DEBUG_ENV_VAR = "TERMSELECT_DEBUG"

DEFAULT_ESCAPE_TIMEOUT = 0.1
_TRUTHY_VALUES = {"1", "true", "yes", "on"}


def _is_truthy(raw_value: str | None) -> bool:
    return (raw_value or "").strip().lower() in _TRUTHY_VALUES


def _parse_timeout(raw_value: str | None) -> float:
    if raw_value is None or not raw_value.strip():
        return DEFAULT_ESCAPE_TIMEOUT
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise SelectorConfigError(
            f"{ESCAPE_TIMEOUT_ENV_VAR} must be a number of seconds, got {raw_value!r}"
        ) from exc
    if value <= 0:
        raise SelectorConfigError(f"{ESCAPE_TIMEOUT_ENV_VAR} must be > 0, got {value}")
    return value


def _parse_max_visible(raw_value: str | None) -> int | None:
    if raw_value is None or not raw_value.strip():
        return None
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise SelectorConfigError(
            f"{MAX_VISIBLE_ENV_VAR} must be an integer, got {raw_value!r}"
        ) from exc
    if value < 1:
        raise SelectorConfigError(f"{MAX_VISIBLE_ENV_VAR} must be ≥ 1, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class SelectorSettings:
    """Tunables for one selector session."""

    escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT
    max_visible: int | None = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SelectorSettings":
        env = os.environ if environ is None else environ
        return cls(
            escape_timeout=_parse_timeout(env.get(ESCAPE_TIMEOUT_ENV_VAR)),
            max_visible=_parse_max_visible(env.get(MAX_VISIBLE_ENV_VAR)),
            debug=_is_truthy(env.get(DEBUG_ENV_VAR)),
        )

    def window_size(self, terminal_rows: int, chrome_lines: int) -> int:
        """Number of option rows that fit under the frame chrome."""
        size = max(1, terminal_rows - chrome_lines)
        if self.max_visible is not None:
            size = min(size, self.max_visible)
        return size
