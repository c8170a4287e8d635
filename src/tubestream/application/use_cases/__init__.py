from .stream_resolve import DeliveryCallback, StreamResolveUseCase, SubtitleCallback

__all__ = ["DeliveryCallback", "StreamResolveUseCase", "SubtitleCallback"]
