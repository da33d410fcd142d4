"""Drop planning - turns a completed drag into remote list operations.

The plan is an ordered tuple of operations for the remote list service.
Nothing here performs I/O: callers run the operations (typically alongside
the matching optimistic mutation) and decide how to roll back on failure.

Reorder operations always carry the RAW insert_before in pre-removal
coordinates; the service compensates for the removed range itself.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from loguru import logger

from tracksplice.domain.playlists.mutator import splice_move
from tracksplice.domain.tracks.models import Track, TrackToRemove

from .source import (
    DndMode,
    DragSet,
    build_tracks_with_positions,
    can_perform_drop,
    determine_effective_mode,
    extract_ranges,
    get_browse_panel_drag_uris,
    is_browse_panel_drop,
    should_adjust_target_index,
    validate_drop_operation,
)
from .target_index import calculate_effective_target_index, compute_adjusted_target_index


@dataclass(frozen=True)
class PanelInfo:
    """What the planner needs to know about a panel."""

    id: str
    list_id: Optional[str]
    is_editable: bool
    dnd_mode: DndMode = "copy"


@dataclass(frozen=True)
class DragSource:
    """Drag payload attached to the grabbed row."""

    type: str  # 'track' | 'lastfm-track'
    panel_id: Optional[str] = None
    list_id: Optional[str] = None
    track: Optional[Track] = None
    index: int = -1  # Index of the grabbed row in its panel
    selected_tracks: tuple[Track, ...] = ()  # Browse panel multi-selection
    matched_uris: tuple[str, ...] = ()  # Imported tracks matched to catalogue URIs

    def describe(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "panel_id": self.panel_id,
            "list_id": self.list_id,
            "selected_tracks": self.selected_tracks,
        }


@dataclass(frozen=True)
class DropTarget:
    """Drop zone under the pointer when the drag ended."""

    type: str  # 'track' | 'panel' | 'player'
    panel_id: Optional[str] = None
    list_id: Optional[str] = None
    position: Optional[int] = None  # Position of the row dropped on, if any

    def describe(self) -> dict[str, Any]:
        return {"type": self.type, "panel_id": self.panel_id, "list_id": self.list_id}


@dataclass(frozen=True)
class ReorderOperation:
    list_id: str
    range_start: int
    insert_before: int
    range_length: int = 1


@dataclass(frozen=True)
class AddOperation:
    list_id: str
    uris: tuple[str, ...]
    position: Optional[int] = None


@dataclass(frozen=True)
class RemoveOperation:
    list_id: str
    tracks: tuple[TrackToRemove, ...]


@dataclass(frozen=True)
class PlayOperation:
    uris: tuple[str, ...]


Operation = Union[ReorderOperation, AddOperation, RemoveOperation, PlayOperation]


@dataclass(frozen=True)
class DropPlan:
    operations: tuple[Operation, ...] = ()
    mode: Optional[DndMode] = None
    target_index: Optional[int] = None
    effective_target_index: Optional[int] = None  # For display only
    error: Optional[str] = None

    @property
    def blocked(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class DropRequest:
    source: Optional[DragSource]
    target: Optional[DropTarget]
    panels: Sequence[PanelInfo]
    drag: DragSet = field(default_factory=lambda: DragSet(tracks=(), indices=()))
    ordered_tracks: Sequence[Track] = ()  # Source panel tracks at drag start
    computed_position: Optional[int] = None  # Live insert_before_global, if any
    list_length: Optional[int] = None  # Full length of the source list
    over: Any = True
    modifier_pressed: bool = False
    allow_mode_inversion: bool = True


def _blocked(error: str) -> DropPlan:
    logger.debug(f"Drop blocked: {error}")
    return DropPlan(error=error)


def _find_panel(panels: Sequence[PanelInfo], panel_id: Optional[str]) -> Optional[PanelInfo]:
    return next((p for p in panels if p.id == panel_id), None)


def _estimate_list_length(
    ordered_tracks: Sequence[Track], positions: Sequence[int], target_index: int
) -> int:
    known = [len(ordered_tracks), target_index]
    known.extend(p + 1 for p in positions)
    known.extend(t.position + 1 for t in ordered_tracks if t.position is not None)
    return max(known)


def plan_same_list_reorders(
    dragged_positions: Sequence[int], list_length: int, insert_before: int
) -> list[tuple[int, int, int]]:
    """Splice calls that move the dragged positions before insert_before.

    One call per contiguous run, in ascending order, each expressed in the
    coordinates of the list as left by the previous call. A single run maps
    to exactly (first position, insert_before, run length).

    Returns:
        List of (range_start, insert_before, range_length) tuples
    """
    dragged = set(dragged_positions)
    anchor = max(0, min(insert_before, list_length))
    while anchor in dragged:
        anchor += 1

    working = list(range(list_length))
    calls = []
    for start, length in extract_ranges(dragged_positions):
        if start >= list_length:
            continue
        length = min(length, list_length - start)
        range_start = working.index(start)
        target = working.index(anchor) if anchor < list_length else list_length
        if range_start <= target <= range_start + length:
            continue  # Already sits right before the anchor
        calls.append((range_start, target, length))
        working = splice_move(working, range_start, target, length)

    return calls


def _plan_browse_drop(request: DropRequest, target_list_id: str, target_index: int) -> DropPlan:
    source = request.source
    uris = get_browse_panel_drag_uris(source.describe(), source.track)
    if not uris:
        return _blocked("No tracks to add")

    logger.debug(f"ADD from browse panel: {len(uris)} tracks -> {target_list_id} at {target_index}")
    return DropPlan(
        operations=(AddOperation(target_list_id, tuple(uris), target_index),),
        mode="copy",
        target_index=target_index,
        effective_target_index=target_index,
    )


def _plan_imported_drop(request: DropRequest, target_list_id: str, target_index: int) -> DropPlan:
    source = request.source
    if source.matched_uris:
        uris = tuple(source.matched_uris)
    elif source.track is not None and source.track.uri:
        uris = (source.track.uri,)
    else:
        return _blocked("Track not matched to catalogue")

    return DropPlan(
        operations=(AddOperation(target_list_id, uris, target_index),),
        mode="copy",
        target_index=target_index,
        effective_target_index=target_index,
    )


def plan_drop(request: DropRequest) -> DropPlan:
    """Build the remote operations for a finished drag.

    Returns:
        A DropPlan; plan.error is set (and operations empty) when the drop
        is blocked
    """
    source, target = request.source, request.target
    error = validate_drop_operation(
        source.describe() if source else None,
        target.describe() if target else None,
        request.over,
    )
    if error:
        return _blocked(error)

    drag = request.drag

    if target.type == "player":
        uris = drag.uris or get_browse_panel_drag_uris(source.describe(), source.track)
        if not uris:
            return _blocked("No tracks to play")
        return DropPlan(operations=(PlayOperation(tuple(uris)),))

    if not target.panel_id or not target.list_id:
        return _blocked("Missing target panel or playlist")

    target_panel = _find_panel(request.panels, target.panel_id)
    if target_panel is None:
        return _blocked("Unknown target panel")
    if not target_panel.is_editable:
        return _blocked("Target playlist is not editable")

    target_index = (
        request.computed_position
        if request.computed_position is not None
        else (target.position or 0)
    )

    if source.type == "lastfm-track":
        return _plan_imported_drop(request, target.list_id, target_index)

    if is_browse_panel_drop(source.list_id, source.panel_id):
        return _plan_browse_drop(request, target.list_id, target_index)

    if not source.panel_id or not source.list_id:
        return _blocked("Missing source panel or playlist")

    source_panel = _find_panel(request.panels, source.panel_id)
    if source_panel is None:
        return _blocked("Unknown source panel")

    if not drag.tracks:
        if source.track is None:
            return _blocked("Nothing to drop")
        drag = DragSet(tracks=(source.track,), indices=(source.index,))

    same_list = source.list_id == target.list_id
    same_panel_same_list = same_list and source.panel_id == target.panel_id
    mode = determine_effective_mode(
        same_panel_same_list,
        source_panel.dnd_mode,
        request.modifier_pressed,
        request.allow_mode_inversion and source_panel.is_editable,
    )

    allowed, reason = can_perform_drop(source_panel.is_editable, target_panel.is_editable, mode)
    if not allowed:
        if same_list:
            return _blocked(reason)
        # Read-only source: the tracks can still be copied across
        mode = "copy"

    effective_target_index = calculate_effective_target_index(
        target_index,
        should_adjust_target_index(request.computed_position, len(drag)),
        lambda: compute_adjusted_target_index(
            target_index, drag.tracks, request.ordered_tracks, source.list_id, target.list_id
        ),
    )
    uris = tuple(drag.uris)

    if same_list:
        if mode == "copy":
            operations: tuple[Operation, ...] = (AddOperation(target.list_id, uris, target_index),)
        else:
            positions = drag.positions
            list_length = request.list_length
            if list_length is None:
                list_length = _estimate_list_length(request.ordered_tracks, positions, target_index)
            calls = plan_same_list_reorders(positions, list_length, target_index)
            operations = tuple(
                ReorderOperation(target.list_id, start, before, length)
                for start, before, length in calls
            )
            logger.debug(f"REORDER {list(positions)} -> before {target_index}: {calls}")
    elif mode == "copy":
        operations = (AddOperation(target.list_id, uris, target_index),)
    else:
        operations = (
            AddOperation(target.list_id, uris, target_index),
            RemoveOperation(source.list_id, tuple(build_tracks_with_positions(drag.tracks))),
        )

    return DropPlan(
        operations=operations,
        mode=mode,
        target_index=target_index,
        effective_target_index=effective_target_index,
    )
