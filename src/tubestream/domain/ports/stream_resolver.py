"""Port for fetching stream candidates of a video."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tubestream.domain.entities.media import StreamCandidates


@runtime_checkable
class StreamResolverPort(Protocol):
    """Fetches page/metadata for a watch URL and reports candidate streams.

    Implementations handle platform-specific extraction (API calls, page
    parsing, signature decoding, etc.).
    """

    @property
    def name(self) -> str:
        """Resolver name (e.g. 'invidious')."""
        ...

    async def fetch(
        self, url: str, *, referer: str | None = None
    ) -> StreamCandidates:
        """Fetch candidate endpoints and raw subtitles for a watch URL.

        Raises StreamResolverError (or a subclass) on failure.
        """
        ...
