"""Markers domain - saved insertion points for batch inserts into playlists."""

from .store import (
    InsertionMarker,
    InsertionPosition,
    MarkerStore,
    adjust_indices,
    clear_list,
    compute_insertion_positions,
    has_marker_at,
    increment_indices_from,
    mark_point,
    shift_after_multi_insert,
    toggle_point,
    unmark_point,
)

__all__ = [
    "InsertionMarker",
    "InsertionPosition",
    "MarkerStore",
    "adjust_indices",
    "clear_list",
    "compute_insertion_positions",
    "has_marker_at",
    "increment_indices_from",
    "mark_point",
    "shift_after_multi_insert",
    "toggle_point",
    "unmark_point",
]
