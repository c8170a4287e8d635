"""Watch-URL templates for the domain aliases of the video platform.

Pure URL helpers, no I/O. Every alias shares the same behavior; only the
domain string and the path template differ.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse


@dataclass(frozen=True)
class LinkVariant:
    """Domain alias plus the path template used to build watch URLs."""

    name: str
    domain: str  # Scheme + host, no trailing slash
    path_template: str = "/watch?v={id}"

    @property
    def hostname(self) -> str:
        return urlparse(self.domain).hostname or ""

    def url_for(self, video_id: str) -> str:
        """Build the watch URL for *video_id* on this alias."""
        return self.domain + self.path_template.format(id=video_id)


CANONICAL = LinkVariant(name="canonical", domain="https://www.youtube.com")
MOBILE = LinkVariant(name="mobile", domain="https://m.youtube.com")
NO_COOKIE = LinkVariant(name="nocookie", domain="https://www.youtube-nocookie.com")
SHORT_LINK = LinkVariant(
    name="shortlink", domain="https://youtu.be", path_template="/{id}"
)

KNOWN_VARIANTS: tuple[LinkVariant, ...] = (CANONICAL, MOBILE, NO_COOKIE, SHORT_LINK)

# Video IDs are 11 chars of base64url
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Path shapes carrying the ID as the second segment: /embed/ID, /shorts/ID, ...
_PATH_PREFIXES = {"embed", "shorts", "live", "v", "e"}


def variant_for_url(url: str) -> LinkVariant | None:
    """Return the known alias whose host serves *url*.

    Hosts without ``www.`` match their ``www.`` alias as well
    (``youtube.com`` -> canonical).
    """
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return None
    if not hostname:
        return None
    for variant in KNOWN_VARIANTS:
        host = variant.hostname
        if hostname == host or "www." + hostname == host:
            return variant
    return None


def extract_video_id(url: str) -> str | None:
    """Extract the 11-character video ID from any known watch-link shape.

    Supported: ``/watch?v=ID``, ``youtu.be/ID``, ``/embed/ID``,
    ``/shorts/ID``, ``/live/ID``, ``/v/ID``. Returns None for other hosts
    or malformed IDs.
    """
    variant = variant_for_url(url)
    if variant is None:
        return None

    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]

    candidate: str | None = None
    if variant is SHORT_LINK:
        candidate = segments[0] if segments else None
    elif segments and segments[0] == "watch":
        values = parse_qs(parsed.query).get("v")
        candidate = values[0] if values else None
    elif len(segments) >= 2 and segments[0] in _PATH_PREFIXES:
        candidate = segments[1]

    if candidate and _VIDEO_ID_RE.match(candidate):
        return candidate
    return None


def canonical_url(url: str) -> str | None:
    """Rewrite any recognised watch-link shape to the canonical watch URL."""
    video_id = extract_video_id(url)
    if video_id is None:
        return None
    return CANONICAL.url_for(video_id)
