"""Text, histogram and JSON reporters."""

from typing import Iterable, Optional

from ..buckets.collection import BucketRule
from ..metrics.aggregator import SuccessPolicy
from ..metrics.histogram import BelowFirstPolicy
from ..utils.config_validator import REPORT_TYPES
from ..utils.errors import ConfigurationError
from .base import Reporter, ReporterFunc, ReportError, format_table, write_report
from .histogram import HistogramReporter
from .json_reporter import JSONReporter
from .text import TextReporter


def create_reporter(
    kind: str,
    rules: Iterable[BucketRule] = (),
    show_urls: bool = False,
    success_policy: Optional[SuccessPolicy] = None,
    histogram_buckets: Optional[str] = None,
    below_first: str = BelowFirstPolicy.CLAMP,
) -> Reporter:
    """Build a reporter from its name: ``text``, ``json`` or ``hist[<boundaries>]``."""
    if kind == "text":
        return TextReporter(rules, show_urls=show_urls, success_policy=success_policy)
    if kind == "json":
        return JSONReporter(success_policy=success_policy)
    if kind.startswith("hist"):
        literal = kind[len("hist"):] or histogram_buckets
        if not literal:
            raise ConfigurationError("Histogram report requires buckets, e.g. hist[0,100ms,200ms]")
        return HistogramReporter.from_string(literal, below_first)
    raise ConfigurationError(f"Invalid report type: {kind!r} (must be one of {', '.join(REPORT_TYPES)})")


__all__ = [
    "HistogramReporter",
    "JSONReporter",
    "REPORT_TYPES",
    "ReportError",
    "Reporter",
    "ReporterFunc",
    "TextReporter",
    "create_reporter",
    "format_table",
    "write_report",
]
