"""Drag source resolution - what moves, in which mode, and whether it may drop.

All functions are pure and cheap; they run at drag start and on drop.
"""

from dataclasses import dataclass
from typing import AbstractSet, Any, Literal, Mapping, Optional, Sequence

from loguru import logger

from tracksplice.domain.selection.keys import get_track_selection_key
from tracksplice.domain.tracks.models import Track, TrackToRemove, track_position

DndMode = Literal["copy", "move"]

SOURCE_TYPES = frozenset({"track", "lastfm-track"})
TARGET_TYPES = frozenset({"track", "panel", "player"})


@dataclass(frozen=True)
class DragSet:
    """Tracks taking part in a drag, in ascending list order."""

    tracks: tuple[Track, ...]
    indices: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(track_position(t, i) for t, i in zip(self.tracks, self.indices))

    @property
    def uris(self) -> list[str]:
        return [t.uri for t in self.tracks]


def determine_drag_tracks(
    grabbed_track: Track,
    grabbed_index: int,
    selected_keys: AbstractSet[str],
    ordered_tracks: Sequence[Track],
) -> DragSet:
    """Decide which tracks a drag carries.

    If the grabbed row is part of the selection, every selected track is
    dragged (in list order); otherwise only the grabbed track is.
    """
    grabbed_key = get_track_selection_key(grabbed_track, grabbed_index)

    if selected_keys and grabbed_key in selected_keys:
        picked = [
            (i, t)
            for i, t in enumerate(ordered_tracks)
            if get_track_selection_key(t, i) in selected_keys
        ]
        logger.debug(f"Dragging {len(picked)} selected tracks (grabbed {grabbed_key})")
        return DragSet(
            tracks=tuple(t for _, t in picked),
            indices=tuple(i for i, _ in picked),
        )

    return DragSet(
        tracks=(grabbed_track,),
        indices=(grabbed_index,) if grabbed_index >= 0 else (),
    )


def determine_effective_mode(
    is_same_list_same_target: bool,
    configured_mode: DndMode,
    modifier_pressed: bool,
    modifier_allowed: bool,
) -> DndMode:
    """Resolve copy/move for a drop.

    A drop back into the same panel and list is always a reorder ("move").
    Elsewhere the configured mode applies, inverted by the modifier key when
    the surface allows inversion.
    """
    if is_same_list_same_target:
        return "move"

    if modifier_pressed and modifier_allowed:
        return "move" if configured_mode == "copy" else "copy"

    return configured_mode


def validate_drop_operation(
    source: Optional[Mapping[str, Any]],
    target: Optional[Mapping[str, Any]],
    over: Any,
) -> Optional[str]:
    """Check a drop gesture.

    Returns:
        None when the drop may proceed, otherwise a message describing why it
        is blocked. Never raises.
    """
    if not over:
        return "No drop target"

    if not source:
        return "Missing source data"

    if source.get("type") not in SOURCE_TYPES:
        return "Invalid source type"

    if not target:
        return "Missing target data"

    if target.get("type") not in TARGET_TYPES:
        return "Invalid target type"

    return None


def is_browse_panel_drop(
    destination_list_id: Optional[str], panel_id: Optional[str]
) -> bool:
    """True for panels that show tracks but no playlist (search, recommendations)."""
    return not destination_list_id and bool(panel_id)


def should_adjust_target_index(
    computed_position: Optional[int], drag_count: int
) -> bool:
    """Whether the drop target needs removal compensation.

    A single track dropped at a live pointer position is already exact;
    multi-track drags and discrete (clicked) targets are not.
    """
    return not (computed_position is not None and drag_count == 1)


def get_browse_panel_drag_uris(
    source: Optional[Mapping[str, Any]], fallback_track: Optional[Track]
) -> list[str]:
    """URIs carried by a drag from a browse panel.

    Prefers the panel's multi-selection, then the single grabbed track.
    """
    selected: Sequence[Track] = (source or {}).get("selected_tracks") or ()
    if selected:
        return [t.uri for t in selected if t.uri]

    if fallback_track is not None and fallback_track.uri:
        return [fallback_track.uri]

    return []


def build_tracks_with_positions(drag_tracks: Sequence[Track]) -> list[TrackToRemove]:
    """Group dragged tracks by URI with the exact positions to remove."""
    uri_positions: dict[str, list[int]] = {}
    for index, track in enumerate(drag_tracks):
        uri_positions.setdefault(track.uri, []).append(track_position(track, index))

    return [
        TrackToRemove(uri=uri, positions=tuple(positions))
        for uri, positions in uri_positions.items()
    ]


def is_contiguous_range(drag_tracks: Sequence[Track]) -> bool:
    """True when the dragged tracks occupy one gap-free run of positions."""
    if len(drag_tracks) <= 1:
        return True

    positions = sorted(track_position(t, i) for i, t in enumerate(drag_tracks))
    if len(set(positions)) != len(positions):
        return False
    return positions[-1] - positions[0] + 1 == len(positions)


def get_track_positions(indices: Sequence[int], ordered_tracks: Sequence[Track]) -> list[int]:
    """Global positions for view indices, ascending."""
    positions = []
    for idx in indices:
        if 0 <= idx < len(ordered_tracks):
            positions.append(track_position(ordered_tracks[idx], idx))
        else:
            positions.append(idx)
    return sorted(positions)


def extract_ranges(indices: Sequence[int]) -> list[tuple[int, int]]:
    """Split indices into contiguous (start, length) runs, ascending."""
    if not indices:
        return []

    ordered = sorted(set(indices))
    ranges: list[tuple[int, int]] = []
    start = ordered[0]
    length = 1

    for previous, current in zip(ordered, ordered[1:]):
        if current == previous + 1:
            length += 1
        else:
            ranges.append((start, length))
            start = current
            length = 1

    ranges.append((start, length))
    return ranges


def can_perform_drop(
    source_editable: bool, target_editable: bool, mode: DndMode
) -> tuple[bool, Optional[str]]:
    """Permission check for a drop.

    Returns:
        (allowed, reason) where reason explains a refusal
    """
    if mode == "move" and not source_editable:
        return False, "Source playlist is read-only"

    if not target_editable:
        return False, "Target playlist is read-only"

    return True, None
