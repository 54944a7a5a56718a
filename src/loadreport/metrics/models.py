"""Data models for aggregated metrics."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..utils.durations import from_nanoseconds, to_nanoseconds


@dataclass
class LatencyMetrics:
    """Latency distribution summary, in seconds."""

    total: float = 0.0
    mean: float = 0.0
    p50: float = 0.0
    p95: float = 0.0
    p99: float = 0.0
    max: float = 0.0


@dataclass
class ByteMetrics:
    """Byte count summary for one direction of traffic."""

    total: int = 0
    mean: float = 0.0


@dataclass
class Metrics:
    """Aggregate statistics over a Results sequence."""

    requests: int = 0
    rate: float = 0.0  # Requests per second over the attack duration
    throughput: float = 0.0  # Successful requests per second including wait

    # Timing (in seconds)
    earliest: float = 0.0
    latest: float = 0.0
    end: float = 0.0
    duration: float = 0.0
    wait: float = 0.0

    latencies: LatencyMetrics = field(default_factory=LatencyMetrics)
    bytes_in: ByteMetrics = field(default_factory=ByteMetrics)
    bytes_out: ByteMetrics = field(default_factory=ByteMetrics)

    success: float = 0.0
    status_codes: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def sorted_status_codes(self) -> List[str]:
        """Status code keys in numeric order."""
        return sorted(self.status_codes, key=int)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form. Durations and timestamps are integer nanoseconds."""
        return {
            "requests": self.requests,
            "rate": self.rate,
            "throughput": self.throughput,
            "earliest": to_nanoseconds(self.earliest),
            "latest": to_nanoseconds(self.latest),
            "end": to_nanoseconds(self.end),
            "duration": to_nanoseconds(self.duration),
            "wait": to_nanoseconds(self.wait),
            "latencies": {
                "total": to_nanoseconds(self.latencies.total),
                "mean": to_nanoseconds(self.latencies.mean),
                "50th": to_nanoseconds(self.latencies.p50),
                "95th": to_nanoseconds(self.latencies.p95),
                "99th": to_nanoseconds(self.latencies.p99),
                "max": to_nanoseconds(self.latencies.max),
            },
            "bytes_in": {"total": self.bytes_in.total, "mean": self.bytes_in.mean},
            "bytes_out": {"total": self.bytes_out.total, "mean": self.bytes_out.mean},
            "success": self.success,
            "status_codes": {code: self.status_codes[code] for code in self.sorted_status_codes()},
            "errors": list(self.errors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metrics":
        """Rebuild a Metrics snapshot from its ``to_dict`` form."""
        latencies = data.get("latencies", {})
        bytes_in = data.get("bytes_in", {})
        bytes_out = data.get("bytes_out", {})
        return cls(
            requests=data.get("requests", 0),
            rate=data.get("rate", 0.0),
            throughput=data.get("throughput", 0.0),
            earliest=from_nanoseconds(data.get("earliest", 0)),
            latest=from_nanoseconds(data.get("latest", 0)),
            end=from_nanoseconds(data.get("end", 0)),
            duration=from_nanoseconds(data.get("duration", 0)),
            wait=from_nanoseconds(data.get("wait", 0)),
            latencies=LatencyMetrics(
                total=from_nanoseconds(latencies.get("total", 0)),
                mean=from_nanoseconds(latencies.get("mean", 0)),
                p50=from_nanoseconds(latencies.get("50th", 0)),
                p95=from_nanoseconds(latencies.get("95th", 0)),
                p99=from_nanoseconds(latencies.get("99th", 0)),
                max=from_nanoseconds(latencies.get("max", 0)),
            ),
            bytes_in=ByteMetrics(total=bytes_in.get("total", 0), mean=bytes_in.get("mean", 0.0)),
            bytes_out=ByteMetrics(total=bytes_out.get("total", 0), mean=bytes_out.get("mean", 0.0)),
            success=data.get("success", 0.0),
            status_codes=dict(data.get("status_codes", {})),
            errors=list(data.get("errors", [])),
        )
