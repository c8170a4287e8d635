"""Domain entities for stream resolution.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum


class MediaType(str, Enum):
    """How a player should treat a delivered URL."""

    HLS = "hls"
    DASH = "dash"
    PROGRESSIVE = "progressive"
    INFERRED = "inferred"  # Unknown format, player sniffs it


@dataclass(frozen=True)
class RawSubtitle:
    """Subtitle track as reported by a stream resolver (fields may be missing)."""

    language_tag: str | None = None  # "en", "de", "pt-BR"
    content: str | None = None  # Subtitle URL or inline payload


@dataclass(frozen=True)
class SubtitleTrack:
    """Validated subtitle track, both fields non-empty."""

    language_tag: str
    content: str


@dataclass(frozen=True)
class ProgressiveStream:
    """A single fixed-quality media URL (no manifest indirection)."""

    url: str
    quality: str = ""  # "720p", "360p"
    mime_type: str = ""  # 'video/mp4; codecs="avc1.64001F, mp4a.40.2"'


SubtitleLoader = Callable[[], Awaitable[Sequence[RawSubtitle]]]


@dataclass(frozen=True)
class StreamCandidates:
    """Everything a stream resolver found for one video.

    Resolvers that fetch subtitles in a separate round trip set
    ``subtitle_loader``; it takes precedence over ``raw_subtitles``.
    """

    hls_url: str | None = None
    dash_url: str | None = None
    progressive_streams: tuple[ProgressiveStream, ...] = ()
    raw_subtitles: tuple[RawSubtitle, ...] = ()
    subtitle_loader: SubtitleLoader | None = field(
        default=None, compare=False, repr=False
    )

    async def load_subtitles(self) -> Sequence[RawSubtitle]:
        """Return raw subtitle tracks, fetching them if a loader is set.

        May raise whatever the loader raises (typically SubtitleFetchError).
        """
        if self.subtitle_loader is None:
            return self.raw_subtitles
        return await self.subtitle_loader()


@dataclass(frozen=True)
class CacheEntry:
    """Resolved endpoint and subtitles for one request key."""

    key: str
    url: str
    subtitles: tuple[SubtitleTrack, ...] = ()


@dataclass(frozen=True)
class DeliveredEndpoint:
    """Playable link pushed to the host's delivery callback."""

    source: str  # Extractor name, e.g. "YouTube"
    name: str  # Display name
    url: str
    media_type: MediaType = MediaType.INFERRED
