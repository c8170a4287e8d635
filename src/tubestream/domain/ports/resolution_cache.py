"""Port for the per-request resolution cache."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from tubestream.domain.entities.media import CacheEntry, SubtitleTrack


@runtime_checkable
class ResolutionCachePort(Protocol):
    """Maps request keys to resolved endpoints and their subtitles.

    Implementations:
      - InMemoryResolutionCache (process lifetime, no eviction)
    """

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the entry for *key*. None = never stored or blank URL."""
        ...

    def store(
        self, key: str, url: str, subtitles: Iterable[SubtitleTrack]
    ) -> CacheEntry:
        """Store (or overwrite) the entry for *key*."""
        ...

    def lock(self, key: str) -> AbstractAsyncContextManager[object]:
        """Async lock serialising lookup+store for *key*."""
        ...

    def __len__(self) -> int: ...
