"""Stream selection, subtitle filtering and watch-link helpers."""

from __future__ import annotations

from .endpoint_selector import infer_media_type, select_endpoint
from .link_variants import (
    CANONICAL,
    KNOWN_VARIANTS,
    MOBILE,
    NO_COOKIE,
    SHORT_LINK,
    LinkVariant,
    canonical_url,
    extract_video_id,
    variant_for_url,
)
from .subtitle_filter import FilteredSubtitles, filter_subtitles

__all__ = [
    "CANONICAL",
    "KNOWN_VARIANTS",
    "MOBILE",
    "NO_COOKIE",
    "SHORT_LINK",
    "FilteredSubtitles",
    "LinkVariant",
    "canonical_url",
    "extract_video_id",
    "filter_subtitles",
    "infer_media_type",
    "select_endpoint",
    "variant_for_url",
]
