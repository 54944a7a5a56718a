"""Parsing and formatting of duration literals such as ``100ms`` or ``1m30s``.

Durations are carried around as float seconds. Literals follow the usual
load-testing tool syntax: a sequence of decimal numbers, each with a unit
suffix (``ns``, ``us``/``µs``, ``ms``, ``s``, ``m``, ``h``).
"""

import re
from typing import Dict

_UNIT_NANOS: Dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

NANOS_PER_SECOND = 1_000_000_000


def parse_duration(literal: str) -> float:
    """Parse a duration literal into seconds.

    Raises:
        ValueError: If the literal is empty or malformed.
    """
    text = literal.strip()
    if not text:
        raise ValueError("empty duration literal")

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return 0.0

    total_nanos = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_PATTERN.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration: {literal!r}")
        total_nanos += float(match.group(1)) * _UNIT_NANOS[match.group(2)]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"invalid duration: {literal!r}")

    return sign * total_nanos / NANOS_PER_SECOND


def to_nanoseconds(seconds: float) -> int:
    """Convert float seconds to integer nanoseconds (the JSON encoding)."""
    return int(round(seconds * NANOS_PER_SECOND))


def from_nanoseconds(nanos: int) -> float:
    """Convert integer nanoseconds back to float seconds."""
    return nanos / NANOS_PER_SECOND


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if frac == 0:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{str(frac).rjust(digits, '0').rstrip('0')}"


def format_duration(seconds: float) -> str:
    """Render seconds in the compact form used in text reports (``1m30s``, ``150ms``)."""
    nanos = to_nanoseconds(seconds)
    if nanos == 0:
        return "0s"

    prefix = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < 1_000:
        return f"{prefix}{nanos}ns"
    if nanos < 1_000_000:
        return f"{prefix}{_with_fraction(nanos, 1_000)}µs"
    if nanos < NANOS_PER_SECOND:
        return f"{prefix}{_with_fraction(nanos, 1_000_000)}ms"

    hours, rem = divmod(nanos, _UNIT_NANOS["h"])
    minutes, rem = divmod(rem, _UNIT_NANOS["m"])
    text = f"{_with_fraction(rem, NANOS_PER_SECOND)}s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return prefix + text
