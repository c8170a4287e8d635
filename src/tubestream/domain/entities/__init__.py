from .errors import (
    InvalidVideoUrlError,
    StreamResolverError,
    SubtitleFetchError,
    TubestreamError,
    VideoNotFoundError,
)
from .media import (
    CacheEntry,
    DeliveredEndpoint,
    MediaType,
    ProgressiveStream,
    RawSubtitle,
    StreamCandidates,
    SubtitleLoader,
    SubtitleTrack,
)

__all__ = [
    "CacheEntry",
    "DeliveredEndpoint",
    "InvalidVideoUrlError",
    "MediaType",
    "ProgressiveStream",
    "RawSubtitle",
    "StreamCandidates",
    "StreamResolverError",
    "SubtitleFetchError",
    "SubtitleLoader",
    "SubtitleTrack",
    "TubestreamError",
    "VideoNotFoundError",
]
