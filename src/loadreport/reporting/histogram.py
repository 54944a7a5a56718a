"""Histogram report: count, percentage and bar per latency bucket."""

import io
from typing import Sequence

from ..metrics.histogram import BelowFirstPolicy, histogram, parse_boundaries, validate_boundaries
from ..results.models import Result
from ..utils.durations import format_duration
from .base import Reporter, format_table

BAR_WIDTH = 75  # Characters at 100%


class HistogramReporter(Reporter):
    """Renders a latency histogram over fixed boundaries."""

    def __init__(self, boundaries: Sequence[float], below_first: str = BelowFirstPolicy.CLAMP):
        self.boundaries = validate_boundaries(boundaries)
        self.below_first = BelowFirstPolicy.validate(below_first)

    @classmethod
    def from_string(cls, value: str, below_first: str = BelowFirstPolicy.CLAMP) -> "HistogramReporter":
        return cls(parse_boundaries(value), below_first)

    def counts(self, results: Sequence[Result]):
        return histogram(self.boundaries, results, self.below_first)

    def _bucket_cells(self, i: int):
        low = format_duration(self.boundaries[i])
        if i + 1 >= len(self.boundaries):
            return [f"[{low},", "+Inf]"]
        return [f"[{low},", f"{format_duration(self.boundaries[i + 1])}]"]

    def render(self, out: io.StringIO, results: Sequence[Result]) -> None:
        total = len(results)
        rows = [["Bucket", "", "#", "%", "Histogram"]]
        for i, count in enumerate(self.counts(results)):
            ratio = count / total if total else 0.0
            rows.append(self._bucket_cells(i) + [str(count), f"{ratio * 100:.2f}%", "#" * int(ratio * BAR_WIDTH)])
        for line in format_table(rows):
            out.write(line + "\n")
