"""Insertion markers - saved "insert new tracks here" points per playlist.

Markers are independent of selection and drag state. Each playlist's markers
are kept sorted ascending by index (insert-before semantics); playlists with
no markers are dropped from the map.
"""

import time
import uuid
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from loguru import logger

from tracksplice.core.store import Store


@dataclass(frozen=True)
class InsertionMarker:
    marker_id: str
    index: int
    created_at: float


@dataclass(frozen=True)
class InsertionPosition:
    """Where one marker's batch of tracks actually lands."""

    marker_id: str
    original_index: int
    effective_index: int


MarkerMap = Mapping[str, tuple[InsertionMarker, ...]]

EMPTY_MARKERS: tuple[InsertionMarker, ...] = ()


def generate_marker_id() -> str:
    return f"marker-{uuid.uuid4().hex[:12]}"


def _with_markers(
    playlists: MarkerMap, list_id: str, markers: Sequence[InsertionMarker]
) -> MarkerMap:
    updated = dict(playlists)
    if markers:
        updated[list_id] = tuple(sorted(markers, key=lambda m: m.index))
    else:
        updated.pop(list_id, None)
    return MappingProxyType(updated)


# Pure reducers ---------------------------------------------------------------


def mark_point(
    playlists: MarkerMap,
    list_id: str,
    index: int,
    marker_id: Optional[str] = None,
    created_at: Optional[float] = None,
) -> MarkerMap:
    """Add a marker; idempotent for an index that is already marked."""
    if index < 0:
        return playlists
    markers = playlists.get(list_id, EMPTY_MARKERS)
    if any(m.index == index for m in markers):
        return playlists

    marker = InsertionMarker(
        marker_id=marker_id or generate_marker_id(),
        index=index,
        created_at=time.time() if created_at is None else created_at,
    )
    return _with_markers(playlists, list_id, [*markers, marker])


def unmark_point(playlists: MarkerMap, list_id: str, index: int) -> MarkerMap:
    markers = playlists.get(list_id)
    if not markers:
        return playlists
    return _with_markers(playlists, list_id, [m for m in markers if m.index != index])


def toggle_point(playlists: MarkerMap, list_id: str, index: int) -> MarkerMap:
    if has_marker_at(playlists, list_id, index):
        return unmark_point(playlists, list_id, index)
    return mark_point(playlists, list_id, index)


def clear_list(playlists: MarkerMap, list_id: str) -> MarkerMap:
    if list_id not in playlists:
        return playlists
    return _with_markers(playlists, list_id, ())


def has_marker_at(playlists: MarkerMap, list_id: str, index: int) -> bool:
    return any(m.index == index for m in playlists.get(list_id, EMPTY_MARKERS))


def adjust_indices(
    playlists: MarkerMap, list_id: str, change_index: int, delta: int
) -> MarkerMap:
    """Shift markers at or after change_index by delta.

    Used when tracks are inserted (delta > 0) or removed (delta < 0) above
    the markers. Markers that would end up at a negative index are dropped.
    Two markers shifted onto the same index are both kept.
    """
    markers = playlists.get(list_id)
    if not markers:
        return playlists

    adjusted = []
    for marker in markers:
        if marker.index >= change_index:
            new_index = marker.index + delta
            if new_index < 0:
                continue
            marker = replace(marker, index=new_index)
        adjusted.append(marker)

    return _with_markers(playlists, list_id, adjusted)


def increment_indices_from(
    playlists: MarkerMap, list_id: str, from_index: int, count: int
) -> MarkerMap:
    """Push markers at or after from_index down by count (after an insert)."""
    return adjust_indices(playlists, list_id, from_index, count)


def shift_after_multi_insert(playlists: MarkerMap, list_id: str) -> MarkerMap:
    """Apply the shift left by inserting one track at every marker.

    Inserting in ascending order, marker i (sorted) has seen i + 1
    insertions at or before it.
    """
    markers = playlists.get(list_id)
    if not markers:
        return playlists
    shifted = [replace(m, index=m.index + i + 1) for i, m in enumerate(markers)]
    return _with_markers(playlists, list_id, shifted)


def compute_insertion_positions(
    markers: Sequence[InsertionMarker], items_per_insert: int
) -> list[InsertionPosition]:
    """Effective index of each marker for one batch insert at every marker.

    Markers are taken in ascending index order; every earlier marker's
    insertion pushes later ones down by items_per_insert, so marker i lands
    at original_index + items_per_insert * i.

    Raises:
        ValueError: If items_per_insert is negative
    """
    if items_per_insert < 0:
        raise ValueError(f"items_per_insert must not be negative, got {items_per_insert}")

    return [
        InsertionPosition(
            marker_id=marker.marker_id,
            original_index=marker.index,
            effective_index=marker.index + items_per_insert * i,
        )
        for i, marker in enumerate(sorted(markers, key=lambda m: m.index))
    ]


# Store -----------------------------------------------------------------------


class MarkerStore:
    """Insertion markers for every playlist, behind one shared Store."""

    def __init__(self) -> None:
        self.store: Store[MarkerMap] = Store(MappingProxyType({}))

    def get_markers(self, list_id: str) -> tuple[InsertionMarker, ...]:
        return self.store.get().get(list_id, EMPTY_MARKERS)

    def mark_point(self, list_id: str, index: int) -> None:
        self.store.update(mark_point, list_id, index)

    def unmark_point(self, list_id: str, index: int) -> None:
        self.store.update(unmark_point, list_id, index)

    def toggle_point(self, list_id: str, index: int) -> None:
        self.store.update(toggle_point, list_id, index)

    def clear_list(self, list_id: str) -> None:
        self.store.update(clear_list, list_id)

    def clear_all(self) -> None:
        self.store.set(MappingProxyType({}))

    def has_active_markers(self) -> bool:
        return any(self.store.get().values())

    def has_marker_at(self, list_id: str, index: int) -> bool:
        return has_marker_at(self.store.get(), list_id, index)

    def adjust_indices(self, list_id: str, change_index: int, delta: int) -> None:
        self.store.update(adjust_indices, list_id, change_index, delta)

    def increment_indices_from(self, list_id: str, from_index: int, count: int) -> None:
        self.store.update(increment_indices_from, list_id, from_index, count)

    def shift_after_multi_insert(self, list_id: str) -> None:
        self.store.update(shift_after_multi_insert, list_id)
        logger.debug(f"Shifted markers after multi-insert in {list_id}")

    def lists_with_markers(
        self, exclude_list_id: Optional[str] = None
    ) -> list[tuple[str, tuple[InsertionMarker, ...]]]:
        return [
            (list_id, markers)
            for list_id, markers in self.store.get().items()
            if markers and list_id != exclude_list_id
        ]

    def total_markers(self, exclude_list_id: Optional[str] = None) -> int:
        return sum(len(markers) for _, markers in self.lists_with_markers(exclude_list_id))
