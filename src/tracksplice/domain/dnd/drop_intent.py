"""
Drop intent computation.

Maps a pointer position over a virtualized, possibly filtered track list to
an insertion point, both in the filtered view and in the full playlist.

Key behaviours:
1. Multi-track drags render a taller overlay, so the pointer is compensated
   by half a row per extra track.
2. Tracks being dragged are never used as the global insertion target.
3. Filtered indices are mapped to global playlist positions.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Sequence

from tracksplice.domain.tracks.models import Track, track_position


@dataclass(frozen=True)
class VirtualRow:
    """Geometry of one rendered row, as reported by the virtualizer."""

    index: int  # Index in the filtered track list
    start: float  # Offset from the top of the list content
    size: float

    @property
    def middle(self) -> float:
        return self.start + self.size / 2


@dataclass(frozen=True)
class DropIntentInput:
    """Everything needed to place a drop for one panel at one instant."""

    pointer_y: float  # Pointer Y in client coordinates
    header_offset: float  # Fixed header content above the list
    container_top: float  # Top of the scroll container in client coordinates
    scroll_top: float  # Current scroll offset of the container
    row_height: float
    virtual_rows: Sequence[VirtualRow]
    filtered_tracks: Sequence[Track]
    dragged_positions: AbstractSet[int] = field(default_factory=frozenset)
    drag_count: int = 1


@dataclass(frozen=True)
class DropIntent:
    """Where a drag would land.

    insertion_index_filtered drives the drop indicator in the view;
    insert_before_global is the playlist position used for the mutation.
    """

    insertion_index_filtered: int
    insert_before_global: int


def overlay_offset(drag_count: int, row_height: float) -> float:
    """Extra offset for a multi-track drag preview (zero for one track)."""
    return max(0.0, (drag_count - 1) * row_height / 2)


def find_insertion_index(
    adjusted_y: float, virtual_rows: Sequence[VirtualRow], track_count: int
) -> int:
    """Index of the first rendered row whose midpoint lies below adjusted_y.

    Returns track_count (append) when no rendered row qualifies.
    """
    for row in sorted(virtual_rows, key=lambda r: r.index):
        if adjusted_y < row.middle:
            return row.index
    return track_count


def map_to_global_position(
    insertion_index: int,
    filtered_tracks: Sequence[Track],
    dragged_positions: AbstractSet[int],
) -> int:
    """Map a filtered insertion index to a position in the full playlist.

    Walks forward from the insertion index and returns the position of the
    first track that is not being dragged. Past the end of the view, or when
    every remaining track is dragged, the drop goes right after the last
    visible track.
    """
    if not filtered_tracks:
        return 0

    last_index = len(filtered_tracks) - 1
    after_last = track_position(filtered_tracks[last_index], last_index) + 1
    # Hidden (filtered-out) dragged tracks may follow the last visible one
    while after_last in dragged_positions:
        after_last += 1

    if insertion_index >= len(filtered_tracks):
        return after_last

    for i in range(max(0, insertion_index), len(filtered_tracks)):
        position = track_position(filtered_tracks[i], i)
        if position not in dragged_positions:
            return position

    return after_last


def compute_drop_intent(data: DropIntentInput) -> DropIntent:
    """Compute the drop intent for the current pointer position.

    Pure and allocation-light; called on every pointer move during a drag.
    """
    if not data.filtered_tracks:
        return DropIntent(insertion_index_filtered=0, insert_before_global=0)

    relative_y = data.pointer_y - data.container_top + data.scroll_top - data.header_offset

    # Top edge of the drag overlay rather than the pointer itself
    adjusted_y = (
        relative_y
        - data.row_height / 2
        - overlay_offset(data.drag_count, data.row_height)
    )

    insertion_index = find_insertion_index(
        adjusted_y, data.virtual_rows, len(data.filtered_tracks)
    )
    insert_before = map_to_global_position(
        insertion_index, data.filtered_tracks, data.dragged_positions
    )

    return DropIntent(
        insertion_index_filtered=insertion_index,
        insert_before_global=insert_before,
    )


def rows_for_full_render(track_count: int, row_height: float) -> list[VirtualRow]:
    """Row geometry for a list with every row rendered at a fixed height."""
    return [
        VirtualRow(index=i, start=i * row_height, size=row_height)
        for i in range(track_count)
    ]
