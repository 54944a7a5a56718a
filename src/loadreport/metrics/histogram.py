"""Latency histograms over user-defined duration boundaries."""

import logging
from bisect import bisect_right
from typing import List, Sequence

from ..results.models import Result
from ..utils.durations import format_duration, parse_duration
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


class BelowFirstPolicy:
    """What to do with latencies below the first boundary."""

    CLAMP = "clamp"  # Count them in bucket 0
    DROP = "drop"  # Leave them out of every bucket

    ALL = (CLAMP, DROP)

    @classmethod
    def validate(cls, policy: str) -> str:
        if policy not in cls.ALL:
            raise ConfigurationError(
                f"Invalid below-first-boundary policy: {policy!r} (must be one of {', '.join(cls.ALL)})"
            )
        return policy


def validate_boundaries(boundaries: Sequence[float]) -> List[float]:
    """Check that boundaries are non-empty and strictly increasing."""
    if not boundaries:
        raise ConfigurationError("Histogram boundaries must not be empty")
    for previous, current in zip(boundaries, boundaries[1:]):
        if current <= previous:
            raise ConfigurationError(
                f"Histogram boundaries must be strictly increasing: "
                f"{format_duration(previous)} >= {format_duration(current)}"
            )
    return list(boundaries)


def parse_boundaries(value: str) -> List[float]:
    """Parse a boundaries literal such as ``[0,100ms,200ms]`` into seconds."""
    text = value.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]

    if not text.strip():
        raise ConfigurationError(f"Bad histogram buckets: {value!r}")

    boundaries = []
    for literal in text.split(","):
        if not literal.strip():
            raise ConfigurationError(f"Bad histogram buckets {value!r}: empty element")
        try:
            boundaries.append(parse_duration(literal))
        except ValueError as e:
            raise ConfigurationError(f"Bad histogram buckets {value!r}: {e}") from e

    return validate_boundaries(boundaries)


def format_boundaries(boundaries: Sequence[float]) -> str:
    """Render boundaries back to their literal form."""
    return "[" + ",".join(format_duration(b) for b in boundaries) + "]"


def histogram(
    boundaries: Sequence[float],
    results: Sequence[Result],
    below_first: str = BelowFirstPolicy.CLAMP,
) -> List[int]:
    """Count results per latency bucket.

    Bucket ``i`` covers ``[boundaries[i], boundaries[i+1])``; the last one is
    unbounded above. The returned list has one count per boundary.
    """
    validate_boundaries(boundaries)
    BelowFirstPolicy.validate(below_first)

    counts = [0] * len(boundaries)
    dropped = 0
    for result in results:
        index = bisect_right(boundaries, result.latency) - 1
        if index < 0:
            if below_first == BelowFirstPolicy.DROP:
                dropped += 1
                continue
            index = 0
        counts[index] += 1

    if dropped:
        logger.debug(f"Dropped {dropped} results below the first histogram boundary")
    return counts
