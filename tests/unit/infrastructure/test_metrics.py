"""Tests for the zero-impact ResolutionMetrics."""

from __future__ import annotations

from tubestream.infrastructure.metrics import ResolutionMetrics


class TestResolutionMetrics:
    def test_default_values(self) -> None:
        metrics = ResolutionMetrics()
        assert metrics.requests == 0
        assert metrics.failures == 0
        assert metrics.last_error is None

    def test_snapshot_no_fetches(self) -> None:
        snap = ResolutionMetrics().snapshot()
        assert snap["fetches"] == 0
        assert snap["avg_fetch_ms"] == 0.0
        assert snap["last_error"] is None

    def test_record_fetch(self) -> None:
        metrics = ResolutionMetrics()
        metrics.record_fetch(2_000_000)  # 2ms
        metrics.record_fetch(4_000_000)  # 4ms
        snap = metrics.snapshot()
        assert snap["fetches"] == 2
        assert snap["avg_fetch_ms"] == 3.0

    def test_record_failure_sets_last_error(self) -> None:
        metrics = ResolutionMetrics()
        metrics.record_failure(RuntimeError("boom"))
        assert metrics.failures == 1
        assert metrics.last_error == "RuntimeError: boom"

    def test_subtitle_failure_counted_separately(self) -> None:
        metrics = ResolutionMetrics()
        metrics.record_subtitle_failure(ValueError("bad"))
        assert metrics.failures == 0
        assert metrics.subtitle_failures == 1
        assert metrics.snapshot()["last_error"] == "ValueError: bad"
