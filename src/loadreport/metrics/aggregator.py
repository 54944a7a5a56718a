"""Reduce a Results sequence to a Metrics snapshot."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..results.models import Result
from ..utils.errors import ConfigurationError
from .models import ByteMetrics, LatencyMetrics, Metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuccessPolicy:
    """Classifies a result as successful.

    A result succeeds when it carries no error and its status code lies in
    the half-open range ``[min_status, max_status)``.
    """

    min_status: int = 200
    max_status: int = 400

    def __post_init__(self) -> None:
        if self.min_status >= self.max_status:
            raise ConfigurationError(
                f"Invalid success status range [{self.min_status}, {self.max_status})"
            )

    def is_success(self, result: Result) -> bool:
        if result.error:
            return False
        return self.min_status <= result.status_code < self.max_status


DEFAULT_SUCCESS_POLICY = SuccessPolicy()


def nearest_rank(sorted_values: Sequence[float], percentile: float) -> float:
    """Nearest-rank percentile of an ascending sequence.

    Uses index ``ceil(p * n) - 1`` clamped to ``[0, n - 1]``. Returns 0 for
    an empty sequence.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    # Round before ceil so that e.g. 0.95 * 20 lands on 19, not 20
    index = math.ceil(round(percentile * n, 9)) - 1
    index = min(max(index, 0), n - 1)
    return float(sorted_values[index])


def compute_metrics(
    results: Sequence[Result], success_policy: Optional[SuccessPolicy] = None
) -> Metrics:
    """Compute aggregate metrics over a Results sequence.

    An empty sequence yields a zero-valued snapshot.
    """
    policy = success_policy or DEFAULT_SUCCESS_POLICY
    metrics = Metrics(requests=len(results))
    if not results:
        logger.debug("No results to aggregate, returning empty metrics")
        return metrics

    timestamps = np.array([r.timestamp for r in results], dtype=float)
    latencies = np.sort(np.array([r.latency for r in results], dtype=float))

    metrics.earliest = float(timestamps.min())
    metrics.latest = float(timestamps.max())
    metrics.end = max(r.completed_at for r in results)
    metrics.duration = metrics.latest - metrics.earliest
    metrics.wait = metrics.end - metrics.latest

    metrics.latencies = LatencyMetrics(
        total=float(latencies.sum()),
        mean=float(latencies.mean()),
        p50=nearest_rank(latencies, 0.50),
        p95=nearest_rank(latencies, 0.95),
        p99=nearest_rank(latencies, 0.99),
        max=float(latencies[-1]),
    )

    bytes_in_total = sum(r.bytes_in for r in results)
    bytes_out_total = sum(r.bytes_out for r in results)
    metrics.bytes_in = ByteMetrics(total=bytes_in_total, mean=bytes_in_total / metrics.requests)
    metrics.bytes_out = ByteMetrics(total=bytes_out_total, mean=bytes_out_total / metrics.requests)

    successes = 0
    status_codes: Dict[str, int] = {}
    errors: List[str] = []
    seen_errors = set()
    for result in results:
        if policy.is_success(result):
            successes += 1
        code = str(result.status_code)
        status_codes[code] = status_codes.get(code, 0) + 1
        if result.error and result.error not in seen_errors:
            seen_errors.add(result.error)
            errors.append(result.error)

    metrics.success = successes / metrics.requests
    metrics.status_codes = status_codes
    metrics.errors = errors

    if metrics.duration > 0:
        metrics.rate = metrics.requests / metrics.duration
    elapsed = metrics.duration + metrics.wait
    if elapsed > 0:
        metrics.throughput = successes / elapsed

    logger.debug(
        f"Aggregated {metrics.requests} results: success={metrics.success:.2%}, "
        f"p99={metrics.latencies.p99:.6f}s, {len(errors)} distinct errors"
    )
    return metrics
