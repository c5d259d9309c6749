"""
Duration values for configuration files.

Accepts Go-style duration text (``"2m"``, ``"1h30m"``, ``"1.5s"``,
``"500ms"``, ``"250us"``, ``"10ns"``), an integer count of nanoseconds, or
a ``timedelta``. Values are held as float seconds and written back as text.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from llm_agents.errors import ConfigError

_UNIT_NANOS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_NANOS_PER_SECOND = 1_000_000_000


def parse_duration(value: Any) -> float:
    """Convert a duration value to seconds.

    Args:
        value: Duration text, integer nanoseconds, or timedelta

    Returns:
        Duration in seconds

    Raises:
        ConfigError: If the value cannot be read as a duration
    """
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration {value!r}: expected text or nanoseconds")
    if isinstance(value, int):
        return value / _NANOS_PER_SECOND
    if isinstance(value, str):
        return _parse_text(value)
    raise ConfigError(
        f"invalid duration {value!r}: must be a string (e.g. \"2m\") or number (nanoseconds)"
    )


def _parse_text(text: str) -> float:
    raw = text.strip()
    sign = 1
    if raw and raw[0] in "+-":
        sign = -1 if raw[0] == "-" else 1
        raw = raw[1:]
    if raw == "0":
        return 0.0
    if not raw:
        raise ConfigError(f"invalid duration string {text!r}")

    total = 0.0
    pos = 0
    while pos < len(raw):
        match = _COMPONENT.match(raw, pos)
        if match is None:
            raise ConfigError(f"invalid duration string {text!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_NANOS[unit]
        pos = match.end()
    return sign * total / _NANOS_PER_SECOND


def format_duration(seconds: float) -> str:
    """Render seconds as Go-style duration text (``120.0`` -> ``"2m0s"``)."""
    nanos = round(seconds * _NANOS_PER_SECOND)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_trim(nanos / 1_000)}µs"
    if nanos < _NANOS_PER_SECOND:
        return f"{sign}{_trim(nanos / 1_000_000)}ms"

    hours, rest = divmod(nanos, _UNIT_NANOS["h"])
    minutes, rest = divmod(rest, _UNIT_NANOS["m"])
    text = ""
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return f"{sign}{text}{_trim(rest / _NANOS_PER_SECOND)}s"


def _trim(value: float) -> str:
    return f"{value:.9f}".rstrip("0").rstrip(".")


Duration = Annotated[
    float,
    BeforeValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str),
]
"""Pydantic field type for durations held as seconds."""
