"""Optimistic playlist mutations over paginated snapshots.

Each function takes an InfinitePages snapshot and returns a new one; inputs
are never modified, so callers can keep the previous value for rollback if
the remote call fails. After every structural change each track's position
is re-derived from its index in the flat sequence.
"""

from dataclasses import replace
from typing import Optional, Sequence

from loguru import logger

from tracksplice.domain.tracks.models import (
    InfinitePages,
    PlaylistPage,
    Track,
    TrackToRemove,
    track_position,
)


def flatten_pages(pages: InfinitePages) -> list[Track]:
    """All tracks of all pages as one ordered list."""
    return list(pages.tracks)


def _rebuild(
    pages: InfinitePages,
    page_tracks: Sequence[Sequence[Track]],
    update_total: bool,
) -> InfinitePages:
    """Reassemble pages from per-page track lists with fresh positions."""
    total = sum(len(tracks) for tracks in page_tracks)
    new_pages = []
    position = 0
    for page, tracks in zip(pages.pages, page_tracks):
        renumbered = []
        for track in tracks:
            renumbered.append(track._replace(position=position))
            position += 1
        new_pages.append(
            replace(
                page,
                tracks=tuple(renumbered),
                total=total if update_total else page.total,
            )
        )
    return replace(pages, pages=tuple(new_pages))


def splice_move(
    tracks: Sequence[Track], range_start: int, insert_before: int, range_length: int
) -> list[Track]:
    """Remote splice contract on a flat list.

    Removes range_length items at range_start and reinserts them before
    insert_before, which is expressed in the ORIGINAL (pre-removal)
    coordinates; insert_before == len(tracks) appends.
    """
    result = list(tracks)
    moved = result[range_start : range_start + range_length]
    del result[range_start : range_start + range_length]

    insert_at = insert_before - range_length if insert_before > range_start else insert_before
    insert_at = max(0, min(insert_at, len(result)))

    result[insert_at:insert_at] = moved
    return result


def apply_reorder_to_infinite_pages(
    pages: InfinitePages,
    range_start: int,
    insert_before: int,
    range_length: int = 1,
) -> InfinitePages:
    """Move a contiguous run of tracks the way the remote service will.

    Pages keep their original sizes; tracks flow across page boundaries.

    Raises:
        ValueError: If range_length is negative
    """
    if range_length < 0:
        raise ValueError(f"range_length must not be negative, got {range_length}")

    flat = flatten_pages(pages)
    if range_length == 0 or not 0 <= range_start < len(flat):
        return pages

    range_length = min(range_length, len(flat) - range_start)
    insert_before = max(0, min(insert_before, len(flat)))
    moved = splice_move(flat, range_start, insert_before, range_length)

    logger.debug(
        f"Optimistic reorder: {range_length} track(s) at {range_start} -> before {insert_before}"
    )

    page_tracks = []
    offset = 0
    for page in pages.pages:
        size = len(page.tracks)
        page_tracks.append(moved[offset : offset + size])
        offset += size

    return _rebuild(pages, page_tracks, update_total=False)


def apply_remove_to_infinite_pages(
    pages: InfinitePages,
    uris: Sequence[str],
    tracks_with_positions: Optional[Sequence[TrackToRemove]] = None,
) -> InfinitePages:
    """Remove tracks, either at exact positions or by URI.

    Position-qualified mode (tracks_with_positions non-empty): removes only the
    tracks whose URI matches an entry AND whose position is in that entry's
    positions. Other occurrences of the same URI survive.

    URI-only mode (no entries): removes every occurrence of each URI in uris.

    An entry whose positions are missing or empty removes nothing for that
    URI. It does NOT fall back to removing every occurrence: an entry asks
    for specific slots, and none were named. Callers wanting "all
    occurrences" use URI-only mode.
    """
    flat_index = 0
    page_tracks: list[list[Track]] = []

    if tracks_with_positions:
        targets: dict[str, set[int]] = {}
        for entry in tracks_with_positions:
            targets.setdefault(entry.uri, set()).update(entry.positions or ())

        for page in pages.pages:
            kept = []
            for track in page.tracks:
                position = track_position(track, flat_index)
                flat_index += 1
                if position in targets.get(track.uri, ()):
                    continue
                kept.append(track)
            page_tracks.append(kept)
    else:
        uri_set = set(uris)
        for page in pages.pages:
            page_tracks.append([t for t in page.tracks if t.uri not in uri_set])

    removed = len(pages.tracks) - sum(len(tracks) for tracks in page_tracks)
    logger.debug(f"Optimistic remove: {removed} track(s)")

    return _rebuild(pages, page_tracks, update_total=True)


def apply_add_to_infinite_pages(
    pages: InfinitePages,
    tracks: Sequence[Track],
    position: Optional[int] = None,
) -> InfinitePages:
    """Insert full tracks before `position` (None or out of range appends).

    The page holding the insertion point absorbs the new tracks; appends go
    to the last page.
    """
    if not tracks:
        return pages

    if not pages.pages:
        page = PlaylistPage(tracks=(), snapshot_id="", total=0)
        pages = replace(pages, pages=(page,), page_params=(None,))

    flat_len = len(pages.tracks)
    insert_at = flat_len if position is None else max(0, min(position, flat_len))

    page_tracks: list[list[Track]] = []
    offset = 0
    inserted = False
    last = len(pages.pages) - 1
    for page_number, page in enumerate(pages.pages):
        current = list(page.tracks)
        size = len(current)
        fits_here = insert_at < offset + size or page_number == last
        if not inserted and fits_here:
            local = insert_at - offset
            current[local:local] = tracks
            inserted = True
        page_tracks.append(current)
        offset += size

    logger.debug(f"Optimistic add: {len(tracks)} track(s) at {insert_at}")
    return _rebuild(pages, page_tracks, update_total=True)


def update_snapshot_id(pages: InfinitePages, snapshot_id: str) -> InfinitePages:
    """Stamp every page with the snapshot id returned by a successful mutation."""
    return replace(
        pages,
        pages=tuple(replace(page, snapshot_id=snapshot_id) for page in pages.pages),
    )
