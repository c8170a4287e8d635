"""Shared test fixtures for tubestream test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest

from tubestream.application.use_cases.stream_resolve import StreamResolveUseCase
from tubestream.domain.entities.media import (
    DeliveredEndpoint,
    ProgressiveStream,
    RawSubtitle,
    StreamCandidates,
    SubtitleTrack,
)
from tubestream.infrastructure.metrics import ResolutionMetrics
from tubestream.infrastructure.persistence.resolution_cache import (
    InMemoryResolutionCache,
)
from tubestream.infrastructure.streams.endpoint_selector import (
    infer_media_type,
    select_endpoint,
)
from tubestream.infrastructure.streams.subtitle_filter import filter_subtitles

WATCH_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def hls_candidates() -> StreamCandidates:
    """Candidates with an HLS manifest and one valid + one invalid subtitle."""
    return StreamCandidates(
        hls_url="https://cdn/a.m3u8",
        raw_subtitles=(
            RawSubtitle(language_tag="en", content="https://cdn/en.vtt"),
            RawSubtitle(language_tag=None, content="x"),
        ),
    )


@pytest.fixture()
def progressive_candidates() -> StreamCandidates:
    return StreamCandidates(
        progressive_streams=(
            ProgressiveStream(url="https://cdn/360.mp4", quality="360p"),
            ProgressiveStream(url="https://cdn/720.mp4", quality="720p"),
        ),
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_resolver(hls_candidates: StreamCandidates) -> MagicMock:
    """Mock StreamResolverPort returning HLS candidates."""
    resolver = MagicMock()
    resolver.name = "fake"
    resolver.fetch = AsyncMock(return_value=hls_candidates)
    return resolver


@pytest.fixture()
def cache() -> InMemoryResolutionCache:
    return InMemoryResolutionCache()


@pytest.fixture()
def metrics() -> ResolutionMetrics:
    return ResolutionMetrics()


@pytest.fixture()
def use_case(
    mock_resolver: MagicMock,
    cache: InMemoryResolutionCache,
    metrics: ResolutionMetrics,
) -> StreamResolveUseCase:
    """Use case wired with the real pure functions and a mock resolver."""
    return StreamResolveUseCase(
        resolver=mock_resolver,
        cache=cache,
        select_fn=select_endpoint,
        filter_fn=filter_subtitles,
        media_type_fn=infer_media_type,
        source_name="YouTube",
        metrics=metrics,
    )


# ---------------------------------------------------------------------------
# Callback recorder
# ---------------------------------------------------------------------------


@dataclass
class CallbackRecorder:
    """Collects everything pushed through the resolve callbacks."""

    links: list[DeliveredEndpoint] = field(default_factory=list)
    subtitles: list[SubtitleTrack] = field(default_factory=list)

    def on_subtitle(self, track: SubtitleTrack) -> None:
        self.subtitles.append(track)

    def on_link(self, link: DeliveredEndpoint) -> None:
        self.links.append(link)


@pytest.fixture()
def recorder() -> CallbackRecorder:
    return CallbackRecorder()
