from .resolution_cache import InMemoryResolutionCache

__all__ = ["InMemoryResolutionCache"]
