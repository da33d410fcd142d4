"""Playlists domain - optimistic mutations over paginated playlist snapshots."""

from .mutator import (
    apply_add_to_infinite_pages,
    apply_remove_to_infinite_pages,
    apply_reorder_to_infinite_pages,
    flatten_pages,
    splice_move,
    update_snapshot_id,
)

__all__ = [
    "apply_add_to_infinite_pages",
    "apply_remove_to_infinite_pages",
    "apply_reorder_to_infinite_pages",
    "flatten_pages",
    "splice_move",
    "update_snapshot_id",
]
