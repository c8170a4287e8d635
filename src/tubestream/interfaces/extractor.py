"""Per-alias extractor facade handed to the host application."""

from __future__ import annotations

import structlog

from tubestream.application.use_cases.stream_resolve import (
    DeliveryCallback,
    StreamResolveUseCase,
    SubtitleCallback,
)
from tubestream.infrastructure.streams.link_variants import LinkVariant

log = structlog.get_logger(__name__)


class LinkExtractor:
    """Binds one domain alias to the shared resolve use case.

    All aliases of a session share the same use case (and therefore the same
    cache); they only differ in ``main_url`` and the watch-URL template.
    """

    def __init__(
        self,
        variant: LinkVariant,
        use_case: StreamResolveUseCase,
        *,
        name: str = "YouTube",
    ) -> None:
        self._variant = variant
        self._use_case = use_case
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def main_url(self) -> str:
        return self._variant.domain

    @property
    def variant(self) -> LinkVariant:
        return self._variant

    def get_extractor_url(self, video_id: str) -> str:
        """Build this alias's watch URL for *video_id*."""
        url = self._variant.url_for(video_id)
        log.debug("extractor_url_built", variant=self._variant.name, url=url)
        return url

    async def get_url(
        self,
        url: str,
        referer: str | None,
        subtitle_callback: SubtitleCallback,
        callback: DeliveryCallback,
    ) -> None:
        """Resolve *url*; results arrive only through the callbacks."""
        await self._use_case.resolve(
            url,
            referer,
            subtitle_callback,
            callback,
            source=self._name,
            name=self._name,
        )

    def __repr__(self) -> str:
        return f"LinkExtractor(variant={self._variant.name!r}, main_url={self.main_url!r})"
