from .resolution_cache import ResolutionCachePort
from .stream_resolver import StreamResolverPort

__all__ = [
    "ResolutionCachePort",
    "StreamResolverPort",
]
