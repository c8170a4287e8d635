"""In-memory resolution cache with per-key async locks."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import structlog

from tubestream.domain.entities.media import CacheEntry, SubtitleTrack

log = structlog.get_logger(__name__)


class InMemoryResolutionCache:
    """Maps request keys to resolved endpoints for the lifetime of the object.

    No eviction, no TTL, no capacity bound: the set of distinct watch URLs a
    session touches is small. Keys are compared as exact strings.

    Safe for concurrent use from one asyncio event loop; callers hold
    ``lock(key)`` around lookup + fetch + store.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the cached entry, or None if missing or its URL is blank."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.url.strip():
            log.debug("resolution_cache_blank_entry", key=key)
            return None
        return entry

    def store(
        self, key: str, url: str, subtitles: Iterable[SubtitleTrack]
    ) -> CacheEntry:
        """Store the entry for *key*, replacing any previous one."""
        if not url.strip():
            raise ValueError(f"refusing to cache blank endpoint for {key!r}")
        entry = CacheEntry(key=key, url=url, subtitles=tuple(subtitles))
        replaced = key in self._entries
        self._entries[key] = entry
        log.debug(
            "resolution_cache_stored",
            key=key,
            subtitles=len(entry.subtitles),
            replaced=replaced,
        )
        return entry

    def lock(self, key: str) -> asyncio.Lock:
        """Return the lock guarding *key* (created on first use)."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None
