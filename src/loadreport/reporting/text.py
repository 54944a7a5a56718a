"""Aligned plain-text report: overall metrics plus one section per bucket."""

import io
import logging
from typing import Dict, Iterable, Optional, Sequence

from ..buckets.collection import BucketCollection, BucketRule
from ..metrics.aggregator import SuccessPolicy, compute_metrics
from ..results.models import Result
from ..utils.durations import format_duration
from .base import Reporter, format_table

logger = logging.getLogger(__name__)


class TextReporter(Reporter):
    """Renders computed metrics as aligned text.

    One section covers all results, followed by one per bucket rule and a
    ``Remaining`` section for results no rule matched (omitted when empty).
    """

    def __init__(
        self,
        rules: Iterable[BucketRule] = (),
        show_urls: bool = False,
        success_policy: Optional[SuccessPolicy] = None,
    ):
        self.rules = list(rules)
        self.show_urls = show_urls
        self.success_policy = success_policy

    def render(self, out: io.StringIO, results: Sequence[Result]) -> None:
        out.write(f"OVERALL: {len(results)} results\n")
        self._render_section(out, results, _count_urls(results))

        # Fresh collection per report so repeated calls never double count
        collection = BucketCollection(self.rules)
        collection.add_results(results)

        for bucket in collection.buckets():
            out.write(f"{bucket}: {len(bucket.results)} results\n")
            self._render_section(out, bucket.results, bucket.urls)

        # Without rules the catch-all would only repeat OVERALL
        catch_all = collection.catch_all_bucket()
        if collection.buckets() and len(catch_all.results) > 0:
            out.write(f"Remaining: {len(catch_all.results)} results\n")
            self._render_section(out, catch_all.results, catch_all.urls)

    def _render_section(self, out: io.StringIO, results: Sequence[Result], url_counts: Dict[str, int]) -> None:
        m = compute_metrics(results, self.success_policy)
        lat = m.latencies
        status_codes = "  ".join(f"{code}:{m.status_codes[code]}" for code in m.sorted_status_codes())

        rows = [
            ["Requests", "[total, rate, throughput]", f"{m.requests}, {m.rate:.2f}, {m.throughput:.2f}"],
            ["Duration", "[total, attack, wait]",
             f"{format_duration(m.duration + m.wait)}, {format_duration(m.duration)}, {format_duration(m.wait)}"],
            ["Latencies", "[mean, 50, 95, 99, max]",
             ", ".join(format_duration(v) for v in (lat.mean, lat.p50, lat.p95, lat.p99, lat.max))],
            ["Bytes In", "[total, mean]", f"{m.bytes_in.total}, {m.bytes_in.mean:.2f}"],
            ["Bytes Out", "[total, mean]", f"{m.bytes_out.total}, {m.bytes_out.mean:.2f}"],
            ["Success", "[ratio]", f"{m.success * 100:.2f}%"],
            ["Status Codes", "[code:count]", status_codes],
        ]
        for line in format_table(rows):
            out.write(line + "\n")

        out.write(f"Error Set: {len(m.errors) if m.errors else '(empty)'}\n")
        for error in m.errors:
            out.write(error + "\n")

        if self.show_urls:
            out.write("URLs in bucket:\n")
            for url in sorted(url_counts):
                out.write(f"  {url}: {url_counts[url]}\n")


def _count_urls(results: Sequence[Result]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for result in results:
        counts[result.url] = counts.get(result.url, 0) + 1
    return counts
