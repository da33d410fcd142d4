"""
Playlist track domain models.

Contains data structures for tracks and the paginated snapshots a playlist
is cached as.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional


class Track(NamedTuple):
    """Represents a track at one slot of a playlist.

    The same track (id/uri) may legitimately appear at several positions.
    position is the 0-based index within the full, unfiltered playlist.
    """

    id: str
    uri: str
    name: str = ""
    artists: tuple[str, ...] = ()
    album: Optional[str] = None
    duration_ms: int = 0
    position: Optional[int] = None


def track_position(track: Track, index: int) -> int:
    """Global playlist position of a track, falling back to its view index."""
    return track.position if track.position is not None else index


@dataclass(frozen=True)
class PlaylistPage:
    """One page of a paginated playlist fetch."""

    tracks: tuple[Track, ...]
    snapshot_id: str
    total: int
    next_cursor: Optional[str] = None


@dataclass(frozen=True)
class InfinitePages:
    """All fetched pages of one playlist, treated as a single flat sequence."""

    pages: tuple[PlaylistPage, ...] = ()
    page_params: tuple[Optional[str], ...] = ()

    @property
    def tracks(self) -> tuple[Track, ...]:
        return tuple(track for page in self.pages for track in page.tracks)


@dataclass(frozen=True)
class TrackToRemove:
    """A URI optionally qualified by the exact positions to remove.

    positions=None (or empty) is a position-qualified entry without positions;
    see apply_remove_to_infinite_pages for how that case is treated.
    """

    uri: str
    positions: Optional[tuple[int, ...]] = field(default=None)
