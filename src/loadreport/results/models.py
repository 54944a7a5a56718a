"""Data models for load-test results."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Result:
    """Outcome of a single completed request, as produced by the attack engine."""

    timestamp: float  # Send time, seconds since epoch
    latency: float  # Seconds
    bytes_out: int = 0
    bytes_in: int = 0
    status_code: int = 0  # 0 means no response was received
    error: str = ""
    url: str = ""

    def __post_init__(self) -> None:
        if self.latency < 0:
            raise ValueError(f"latency must be >= 0, got {self.latency}")
        if self.bytes_out < 0 or self.bytes_in < 0:
            raise ValueError(
                f"byte counts must be >= 0, got out={self.bytes_out} in={self.bytes_in}"
            )

    @property
    def completed_at(self) -> float:
        """Time the response was received."""
        return self.timestamp + self.latency


# Completion order, never mutated once built.
Results = List[Result]
