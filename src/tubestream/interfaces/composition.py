"""Composition root: wires resolver, cache, use case and extractors."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import httpx
import structlog

from tubestream.application.use_cases.stream_resolve import StreamResolveUseCase
from tubestream.domain.ports.stream_resolver import StreamResolverPort
from tubestream.infrastructure.config.schema import AppConfig
from tubestream.infrastructure.logging.setup import configure_logging
from tubestream.infrastructure.metrics import ResolutionMetrics
from tubestream.infrastructure.persistence.resolution_cache import (
    InMemoryResolutionCache,
)
from tubestream.infrastructure.resolvers.invidious import InvidiousStreamResolver
from tubestream.infrastructure.streams.endpoint_selector import (
    infer_media_type,
    select_endpoint,
)
from tubestream.infrastructure.streams.link_variants import (
    KNOWN_VARIANTS,
    variant_for_url,
)
from tubestream.infrastructure.streams.subtitle_filter import filter_subtitles
from tubestream.interfaces.extractor import LinkExtractor

log = structlog.get_logger(__name__)


@dataclass
class Extractors:
    """One extractor per domain alias, all sharing a single use case."""

    use_case: StreamResolveUseCase
    metrics: ResolutionMetrics
    by_variant: dict[str, LinkExtractor] = field(default_factory=dict)

    def get(self, variant_name: str) -> LinkExtractor:
        """Return the extractor for *variant_name*; KeyError if unknown."""
        return self.by_variant[variant_name]

    def for_url(self, url: str) -> LinkExtractor | None:
        """Return the extractor whose alias host serves *url*."""
        variant = variant_for_url(url)
        if variant is None:
            return None
        return self.by_variant.get(variant.name)


def build_extractors(
    config: AppConfig,
    resolver: StreamResolverPort,
    *,
    metrics: ResolutionMetrics | None = None,
) -> Extractors:
    """Build the use case (with a fresh cache) and the per-alias extractors."""
    metrics = metrics or ResolutionMetrics()
    use_case = StreamResolveUseCase(
        resolver=resolver,
        cache=InMemoryResolutionCache(),
        select_fn=select_endpoint,
        filter_fn=filter_subtitles,
        media_type_fn=infer_media_type,
        source_name=config.source_name,
        metrics=metrics,
    )
    extractors = Extractors(use_case=use_case, metrics=metrics)
    for variant in KNOWN_VARIANTS:
        extractors.by_variant[variant.name] = LinkExtractor(
            variant, use_case, name=config.source_name
        )
    log.debug(
        "extractors_built",
        resolver=resolver.name,
        variants=sorted(extractors.by_variant),
    )
    return extractors


@asynccontextmanager
async def open_extractors(
    config: AppConfig, *, setup_logging: bool = False
) -> AsyncIterator[Extractors]:
    """Create the shared HTTP client and yield ready-to-use extractors.

    The resolution cache lives exactly as long as this context. Hosts that do
    not configure logging themselves pass ``setup_logging=True``.
    """
    if setup_logging:
        configure_logging(config)

    async with httpx.AsyncClient(
        timeout=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
        headers={"User-Agent": config.http_user_agent},
    ) as client:
        resolver = InvidiousStreamResolver(
            http_client=client,
            base_url=config.resolver.invidious_url,
            local=config.resolver.local,
            timeout=config.http_timeout_seconds,
        )
        log.info(
            "extractors_open",
            resolver=resolver.name,
            instance=resolver.base_url,
        )
        extractors = build_extractors(config, resolver)
        try:
            yield extractors
        finally:
            log.info("extractors_closed", **extractors.metrics.snapshot())
