"""Invidious stream resolver: reads stream metadata from an Invidious API.

Invidious instances expose the platform's player data as JSON:
    GET {instance}/api/v1/videos/{video_id}
        hlsUrl        HLS master playlist (live streams only)
        dashUrl       DASH manifest served by the instance
        formatStreams progressive (muxed audio+video) streams
    GET {instance}/api/v1/captions/{video_id}
        captions      [{label, languageCode, url}], url relative to instance

Subtitles are fetched lazily in a second request so a caption failure does
not lose an already resolved endpoint.
"""

from __future__ import annotations

import functools
from typing import Any
from urllib.parse import urljoin

import httpx
import structlog

from tubestream.domain.entities.errors import (
    InvalidVideoUrlError,
    StreamResolverError,
    SubtitleFetchError,
    VideoNotFoundError,
)
from tubestream.domain.entities.media import (
    ProgressiveStream,
    RawSubtitle,
    StreamCandidates,
)
from tubestream.infrastructure.streams.link_variants import extract_video_id

log = structlog.get_logger(__name__)

_DEFAULT_TIMEOUT = 15.0


def _absolute(base_url: str, value: Any) -> str | None:
    """Resolve an instance-relative URL; non-strings and blanks become None."""
    if not isinstance(value, str) or not value.strip():
        return None
    return urljoin(base_url + "/", value)


def _parse_format_streams(base_url: str, raw: Any) -> tuple[ProgressiveStream, ...]:
    """Map ``formatStreams`` to ProgressiveStreams, keeping API order."""
    if not isinstance(raw, list):
        return ()
    streams: list[ProgressiveStream] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        url = _absolute(base_url, item.get("url"))
        if url is None:
            continue
        streams.append(
            ProgressiveStream(
                url=url,
                quality=str(item.get("qualityLabel") or item.get("quality") or ""),
                mime_type=str(item.get("type") or ""),
            )
        )
    return tuple(streams)


def _parse_captions(base_url: str, raw: Any) -> tuple[RawSubtitle, ...]:
    """Map caption entries to RawSubtitles; missing fields stay None."""
    if not isinstance(raw, list):
        return ()
    tracks: list[RawSubtitle] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        language = item.get("languageCode") or item.get("language_code")
        tracks.append(
            RawSubtitle(
                language_tag=language if isinstance(language, str) else None,
                content=_absolute(base_url, item.get("url")),
            )
        )
    return tuple(tracks)


def _error_message(resp: httpx.Response) -> str:
    """Extract the ``error`` field Invidious puts in JSON error bodies."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {resp.status_code}"


class InvidiousStreamResolver:
    """Resolves watch URLs through an Invidious instance's REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        *,
        local: bool = False,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._local = local
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "invidious"

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch(
        self, url: str, *, referer: str | None = None
    ) -> StreamCandidates:
        """Fetch candidate streams for a watch URL.

        Raises:
            InvalidVideoUrlError: no video ID in *url*.
            VideoNotFoundError: the instance reports the video as missing.
            StreamResolverError: transport failure or malformed response.
        """
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidVideoUrlError("no video id in url", url=url)

        headers = {"Referer": referer} if referer else None
        params = {"local": "true"} if self._local else None
        try:
            resp = await self._http.get(
                f"{self._base_url}/api/v1/videos/{video_id}",
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise StreamResolverError("invidious request timed out", url=url) from exc
        except httpx.HTTPError as exc:
            raise StreamResolverError(
                f"invidious request failed: {exc}", url=url
            ) from exc

        if resp.status_code == 404:
            raise VideoNotFoundError(_error_message(resp), url=url)
        if resp.status_code != 200:
            raise StreamResolverError(_error_message(resp), url=url)

        try:
            data = resp.json()
        except ValueError as exc:
            raise StreamResolverError("invalid JSON from invidious", url=url) from exc
        if not isinstance(data, dict):
            raise StreamResolverError("unexpected invidious payload", url=url)
        if data.get("error"):
            raise VideoNotFoundError(str(data["error"]), url=url)

        candidates = StreamCandidates(
            hls_url=_absolute(self._base_url, data.get("hlsUrl")),
            dash_url=_absolute(self._base_url, data.get("dashUrl")),
            progressive_streams=_parse_format_streams(
                self._base_url, data.get("formatStreams")
            ),
            subtitle_loader=functools.partial(self._fetch_captions, video_id),
        )
        log.debug(
            "invidious_fetched",
            video_id=video_id,
            has_hls=candidates.hls_url is not None,
            has_dash=candidates.dash_url is not None,
            progressive=len(candidates.progressive_streams),
        )
        return candidates

    async def _fetch_captions(self, video_id: str) -> tuple[RawSubtitle, ...]:
        """Load the caption list for *video_id*.

        Raises SubtitleFetchError on any transport or payload problem.
        """
        try:
            resp = await self._http.get(
                f"{self._base_url}/api/v1/captions/{video_id}",
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise SubtitleFetchError(f"caption request failed: {exc}") from exc

        if resp.status_code != 200:
            raise SubtitleFetchError(
                f"caption list for {video_id}: {_error_message(resp)}"
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise SubtitleFetchError("invalid caption JSON") from exc
        if not isinstance(data, dict):
            raise SubtitleFetchError("unexpected caption payload")

        tracks = _parse_captions(self._base_url, data.get("captions"))
        log.debug("invidious_captions_fetched", video_id=video_id, count=len(tracks))
        return tracks
