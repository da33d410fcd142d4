"""Target index reconciliation between the visual drop point and the
splice contract's coordinates.

The remote reorder call takes insert_before in pre-removal coordinates and
compensates for the removed range itself, exactly like
apply_reorder_to_infinite_pages. Always hand the RAW target index to either
of them: pre-adjusting with compute_adjusted_target_index and then letting
the splice adjust again subtracts the removed tracks twice.
"""

from typing import Callable, Optional, Sequence

from tracksplice.domain.tracks.models import Track, track_position


def _dragged_position(track: Track, ordered_tracks: Sequence[Track]) -> Optional[int]:
    if track.position is not None:
        return track.position
    key = track.id or track.uri
    for index, candidate in enumerate(ordered_tracks):
        if (candidate.id or candidate.uri) == key:
            return track_position(candidate, index)
    return None


def compute_adjusted_target_index(
    target_index: int,
    drag_tracks: Sequence[Track],
    ordered_tracks: Sequence[Track],
    source_list_id: Optional[str],
    target_list_id: Optional[str],
) -> int:
    """Target index after the dragged tracks are taken out of the list.

    Only same-list moves are adjusted: every dragged track sitting strictly
    before the target shifts it left by one.
    """
    if not source_list_id or not target_list_id:
        return target_index
    if source_list_id != target_list_id or not drag_tracks:
        return target_index

    positions = {
        p
        for p in (_dragged_position(t, ordered_tracks) for t in drag_tracks)
        if p is not None
    }
    removed_before = sum(1 for p in positions if p < target_index)
    return max(0, target_index - removed_before)


def calculate_effective_target_index(
    target_index: int,
    should_adjust: bool,
    compute_adjustment: Callable[[], int],
) -> int:
    return compute_adjustment() if should_adjust else target_index


def compute_insert_index(
    drop_index: int,
    filtered_tracks: Sequence[Track],
    all_tracks: Sequence[Track],
) -> int:
    """Map a drop index in a filtered view to an index in the full list.

    Past the end of the view the drop goes right after the last filtered
    track. Tracks are matched by position when known, else by id.
    """
    def full_index(track: Track) -> int:
        for index, candidate in enumerate(all_tracks):
            if track.position is not None and candidate.position is not None:
                if candidate.position == track.position:
                    return index
            elif candidate.id == track.id:
                return index
        return -1

    if drop_index >= len(filtered_tracks):
        if not filtered_tracks:
            return len(all_tracks)
        return full_index(filtered_tracks[-1]) + 1

    if drop_index < 0:
        return 0

    return max(0, full_index(filtered_tracks[drop_index]))


def adjust_insert_index_for_removal(
    source_indices: Sequence[int], target_index: int
) -> int:
    """Shift target_index left by the number of sources removed before it."""
    return target_index - sum(1 for i in set(source_indices) if i < target_index)
