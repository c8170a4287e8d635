"""Zero-impact in-memory resolution metrics.

All counters are plain Python integers manipulated inside the single-threaded
async event loop: no locks, no I/O, no external dependencies.

``time.perf_counter_ns()`` is used for timing (monotonic, nanosecond
resolution, near-zero overhead).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class ResolutionMetrics:
    """Counters for the resolve flow, readable by the host for observability.

    Failures never reach the caller of ``resolve``; ``failures`` and
    ``last_error`` make resolver outages visible anyway.
    """

    requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    fetches: int = 0
    failures: int = 0
    subtitle_failures: int = 0
    empty_results: int = 0
    deliveries: int = 0
    subtitles_delivered: int = 0
    total_fetch_duration_ns: int = 0
    last_error: str | None = None
    _start_ns: int = field(default_factory=time.perf_counter_ns)

    def record_fetch(self, duration_ns: int) -> None:
        self.fetches += 1
        self.total_fetch_duration_ns += duration_ns

    def record_failure(self, error: BaseException) -> None:
        self.failures += 1
        self.last_error = f"{type(error).__name__}: {error}"

    def record_subtitle_failure(self, error: BaseException) -> None:
        self.subtitle_failures += 1
        self.last_error = f"{type(error).__name__}: {error}"

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-serializable summary."""
        avg_ms = (
            round(self.total_fetch_duration_ns / self.fetches / 1_000_000, 1)
            if self.fetches
            else 0.0
        )
        uptime_s = round((time.perf_counter_ns() - self._start_ns) / 1e9, 1)
        return {
            "uptime_seconds": uptime_s,
            "requests": self.requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "fetches": self.fetches,
            "avg_fetch_ms": avg_ms,
            "failures": self.failures,
            "subtitle_failures": self.subtitle_failures,
            "empty_results": self.empty_results,
            "deliveries": self.deliveries,
            "subtitles_delivered": self.subtitles_delivered,
            "last_error": self.last_error,
        }
