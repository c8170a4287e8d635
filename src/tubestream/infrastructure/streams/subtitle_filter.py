"""Drop incomplete subtitle tracks reported by a stream resolver."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tubestream.domain.entities.media import RawSubtitle, SubtitleTrack


class FilteredSubtitles:
    """Lazy, restartable view of the valid tracks in a raw subtitle list.

    Each iteration walks the (snapshotted) raw tracks again, so the view can
    be consumed any number of times.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[RawSubtitle]) -> None:
        self._raw = tuple(raw)

    def __iter__(self) -> Iterator[SubtitleTrack]:
        for track in self._raw:
            if not track.language_tag or not track.content:
                continue
            yield SubtitleTrack(language_tag=track.language_tag, content=track.content)

    @property
    def raw_count(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"FilteredSubtitles(raw_count={len(self._raw)})"


def filter_subtitles(raw: Iterable[RawSubtitle]) -> FilteredSubtitles:
    """Keep tracks carrying both a language tag and content, in input order."""
    return FilteredSubtitles(raw)
