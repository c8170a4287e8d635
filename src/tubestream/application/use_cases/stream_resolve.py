"""Stream resolution use case.

Watch URL -> cache lookup -> (miss) resolver fetch -> select endpoint
-> filter subtitles -> cache store -> delivery + subtitle callbacks.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

import httpx
import structlog

from tubestream.domain.entities.errors import StreamResolverError
from tubestream.domain.entities.media import (
    CacheEntry,
    DeliveredEndpoint,
    MediaType,
    RawSubtitle,
    StreamCandidates,
    SubtitleTrack,
)
from tubestream.domain.ports.resolution_cache import ResolutionCachePort
from tubestream.domain.ports.stream_resolver import StreamResolverPort

# ---------------------------------------------------------------------------
# Protocols: define what this use case needs from its dependencies.
# Infrastructure components satisfy these via structural subtyping.
# ---------------------------------------------------------------------------


class _MetricsRecorder(Protocol):
    """Records resolve-flow counters."""

    requests: int
    cache_hits: int
    cache_misses: int
    empty_results: int
    deliveries: int
    subtitles_delivered: int

    def record_fetch(self, duration_ns: int) -> None: ...

    def record_failure(self, error: BaseException) -> None: ...

    def record_subtitle_failure(self, error: BaseException) -> None: ...


# Type aliases for injected pure functions.
_SelectFn = Callable[[StreamCandidates], str]
_FilterFn = Callable[[Sequence[RawSubtitle]], Iterable[SubtitleTrack]]
_MediaTypeFn = Callable[[str], MediaType]

SubtitleCallback = Callable[[SubtitleTrack], None]
DeliveryCallback = Callable[[DeliveredEndpoint], None]

log = structlog.get_logger(__name__)


class StreamResolveUseCase:
    """Resolves watch URLs to playable endpoints, caching per URL.

    Best effort: every failure is logged (and counted when metrics are
    attached) but never raised to the caller. A failed or empty resolution
    leaves no cache entry, so the next call for the same URL retries.
    """

    def __init__(
        self,
        *,
        resolver: StreamResolverPort,
        cache: ResolutionCachePort,
        select_fn: _SelectFn,
        filter_fn: _FilterFn,
        media_type_fn: _MediaTypeFn,
        source_name: str = "YouTube",
        metrics: _MetricsRecorder | None = None,
    ) -> None:
        self._resolver = resolver
        self._cache = cache
        self._select_fn = select_fn
        self._filter_fn = filter_fn
        self._media_type_fn = media_type_fn
        self._source_name = source_name
        self._metrics = metrics

    @property
    def cache(self) -> ResolutionCachePort:
        return self._cache

    @property
    def metrics(self) -> _MetricsRecorder | None:
        return self._metrics

    async def resolve(
        self,
        url: str,
        referer: str | None,
        subtitle_callback: SubtitleCallback,
        callback: DeliveryCallback,
        *,
        source: str | None = None,
        name: str | None = None,
    ) -> None:
        """Resolve *url* and push the results through the callbacks.

        Args:
            url: Watch-page URL; the cache key (exact string match).
            referer: Forwarded to the resolver, unused otherwise.
            subtitle_callback: Called once per valid subtitle track.
            callback: Called at most once with the playable endpoint.
            source: Source label for the delivered link (default: source_name).
            name: Display name for the delivered link (default: source).
        """
        source = source or self._source_name
        name = name or source
        if self._metrics is not None:
            self._metrics.requests += 1
        log.debug("stream_resolve_start", url=url, referer=referer)

        try:
            entry = await self._get_entry(url, referer)
            if entry is None:
                return
            self._deliver(entry, source, name, subtitle_callback, callback)
        except StreamResolverError as exc:
            self._record_failure(exc)
            log.warning(
                "stream_resolve_failed",
                url=url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        except httpx.TimeoutException as exc:
            self._record_failure(exc)
            log.warning("stream_resolve_timeout", url=url)
        except httpx.HTTPError as exc:
            self._record_failure(exc)
            log.warning("stream_resolve_http_error", url=url, error=str(exc))
        except Exception as exc:
            self._record_failure(exc)
            log.exception("stream_resolve_error", url=url)

    async def _get_entry(self, url: str, referer: str | None) -> CacheEntry | None:
        """Return the cached entry for *url*, resolving it on a miss.

        Concurrent callers for the same URL queue on the per-key lock and
        find the entry stored by whoever resolved first.
        """
        cached = self._cache.lookup(url)
        if cached is not None:
            self._record_hit(url)
            return cached

        async with self._cache.lock(url):
            cached = self._cache.lookup(url)
            if cached is not None:
                self._record_hit(url)
                return cached

            if self._metrics is not None:
                self._metrics.cache_misses += 1
            log.debug("stream_cache_miss", url=url, resolver=self._resolver.name)

            start_ns = time.perf_counter_ns()
            candidates = await self._resolver.fetch(url, referer=referer)
            if self._metrics is not None:
                self._metrics.record_fetch(time.perf_counter_ns() - start_ns)

            endpoint = self._select_fn(candidates)
            if not endpoint:
                if self._metrics is not None:
                    self._metrics.empty_results += 1
                log.info("stream_resolve_no_endpoint", url=url)
                return None

            subtitles = await self._load_subtitles(url, candidates)
            entry = self._cache.store(url, endpoint, subtitles)
            log.info(
                "stream_resolved",
                url=url,
                endpoint=endpoint,
                subtitles=len(entry.subtitles),
            )
            return entry

    async def _load_subtitles(
        self, url: str, candidates: StreamCandidates
    ) -> tuple[SubtitleTrack, ...]:
        """Fetch and filter subtitles; any failure degrades to no subtitles."""
        try:
            raw = tuple(await candidates.load_subtitles())
        except Exception as exc:
            if self._metrics is not None:
                self._metrics.record_subtitle_failure(exc)
            log.warning(
                "subtitle_fetch_failed",
                url=url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return ()

        tracks = tuple(self._filter_fn(raw))
        skipped = len(raw) - len(tracks)
        if skipped:
            log.debug("subtitle_tracks_skipped", url=url, skipped=skipped)
        return tracks

    def _deliver(
        self,
        entry: CacheEntry,
        source: str,
        name: str,
        subtitle_callback: SubtitleCallback,
        callback: DeliveryCallback,
    ) -> None:
        link = DeliveredEndpoint(
            source=source,
            name=name,
            url=entry.url,
            media_type=self._media_type_fn(entry.url),
        )
        callback(link)
        if self._metrics is not None:
            self._metrics.deliveries += 1
        log.debug(
            "stream_delivered",
            url=entry.key,
            endpoint=link.url,
            media_type=link.media_type.value,
        )

        for track in entry.subtitles:
            subtitle_callback(track)
            if self._metrics is not None:
                self._metrics.subtitles_delivered += 1
        if not entry.subtitles:
            log.debug("stream_no_subtitles", url=entry.key)

    def _record_hit(self, url: str) -> None:
        if self._metrics is not None:
            self._metrics.cache_hits += 1
        log.debug("stream_cache_hit", url=url)

    def _record_failure(self, exc: BaseException) -> None:
        if self._metrics is not None:
            self._metrics.record_failure(exc)
