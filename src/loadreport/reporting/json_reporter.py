"""JSON serialization of a Metrics snapshot."""

import io
import json
from typing import Optional, Sequence

from ..metrics.aggregator import SuccessPolicy, compute_metrics
from ..results.models import Result
from ..utils.durations import to_nanoseconds
from .base import Reporter
from .histogram import HistogramReporter


class JSONReporter(Reporter):
    """Writes the metrics as a single JSON object.

    Durations and timestamps are integer nanoseconds. A histogram is nested
    under ``"histogram"`` only when one is attached.
    """

    def __init__(
        self,
        success_policy: Optional[SuccessPolicy] = None,
        histogram: Optional[HistogramReporter] = None,
    ):
        self.success_policy = success_policy
        self.histogram = histogram

    def render(self, out: io.StringIO, results: Sequence[Result]) -> None:
        payload = compute_metrics(results, self.success_policy).to_dict()
        if self.histogram is not None:
            payload["histogram"] = [
                {"bucket": to_nanoseconds(boundary), "count": count}
                for boundary, count in zip(self.histogram.boundaries, self.histogram.counts(results))
            ]
        json.dump(payload, out)
