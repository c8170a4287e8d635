"""Stream resolution exceptions."""

from __future__ import annotations


class TubestreamError(Exception):
    """Base class for all tubestream errors."""


class StreamResolverError(TubestreamError):
    """Raised when a stream resolver cannot fetch or parse a video."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class VideoNotFoundError(StreamResolverError):
    """Raised when the platform reports the video as missing or unavailable."""


class InvalidVideoUrlError(StreamResolverError):
    """Raised when no video identifier can be extracted from a URL."""


class SubtitleFetchError(TubestreamError):
    """Raised when the subtitle list of an otherwise resolved video fails to load."""
