"""Pick one playable URL from a resolver's candidate set.

Pure selection logic with no I/O and no framework dependencies.
"""

from __future__ import annotations

from urllib.parse import urlparse

from tubestream.domain.entities.media import MediaType, StreamCandidates

_PROGRESSIVE_EXTENSIONS = (".mp4", ".m4v", ".webm", ".mkv", ".mov", ".3gp", ".flv")


def select_endpoint(candidates: StreamCandidates) -> str:
    """Return the preferred playable URL, or ``""`` when nothing is usable.

    Priority: HLS manifest, DASH manifest, first progressive stream.
    """
    ordered = [candidates.hls_url, candidates.dash_url]
    if candidates.progressive_streams:
        ordered.append(candidates.progressive_streams[0].url)
    for url in ordered:
        if url and url.strip():
            return url
    return ""


def infer_media_type(url: str) -> MediaType:
    """Classify a URL by its format.

    Examples:
        "https://cdn/a.m3u8" -> HLS
        "https://inv.example/api/manifest/dash/id/abc" -> DASH
        "https://rr1.googlevideo.com/videoplayback?itag=18" -> PROGRESSIVE
        "https://cdn/stream" -> INFERRED
    """
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        return MediaType.INFERRED

    if path.endswith(".m3u8") or "/manifest/hls_" in path:
        return MediaType.HLS
    if path.endswith(".mpd") or "/manifest/dash/" in path:
        return MediaType.DASH
    if path.endswith(_PROGRESSIVE_EXTENSIONS) or path.endswith("/videoplayback"):
        return MediaType.PROGRESSIVE
    return MediaType.INFERRED
