"""Metrics aggregation and latency histograms."""

from .aggregator import SuccessPolicy, compute_metrics, nearest_rank
from .histogram import BelowFirstPolicy, format_boundaries, histogram, parse_boundaries, validate_boundaries
from .models import ByteMetrics, LatencyMetrics, Metrics

__all__ = [
    "BelowFirstPolicy",
    "ByteMetrics",
    "LatencyMetrics",
    "Metrics",
    "SuccessPolicy",
    "compute_metrics",
    "format_boundaries",
    "histogram",
    "nearest_rank",
    "parse_boundaries",
    "validate_boundaries",
]
