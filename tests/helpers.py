"""Builders for tracks and paginated snapshots used across the tests."""

from typing import Optional, Sequence

from tracksplice.domain.tracks.models import InfinitePages, PlaylistPage, Track


def make_track(track_id: str, position: Optional[int] = None, uri: Optional[str] = None) -> Track:
    return Track(
        id=track_id,
        uri=uri or f"spotify:track:{track_id}",
        name=track_id,
        position=position,
    )


def make_tracks(ids: Sequence[str]) -> list[Track]:
    """Tracks with positions matching their list index."""
    return [make_track(track_id, position=i) for i, track_id in enumerate(ids)]


def make_pages(page_ids: Sequence[Sequence[str]], snapshot_id: str = "snap-1") -> InfinitePages:
    """Paginated snapshot with continuous positions across pages."""
    total = sum(len(ids) for ids in page_ids)
    pages = []
    position = 0
    for ids in page_ids:
        tracks = []
        for track_id in ids:
            tracks.append(make_track(track_id, position=position))
            position += 1
        pages.append(PlaylistPage(tracks=tuple(tracks), snapshot_id=snapshot_id, total=total))
    return InfinitePages(pages=tuple(pages), page_params=tuple([None] * len(pages)))


def ids_of(tracks: Sequence[Track]) -> list[str]:
    return [t.id for t in tracks]
