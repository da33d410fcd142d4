"""Drag-and-drop domain - drag sources, drop intent, target indices and drop plans.

This domain handles:
- Resolving which tracks a drag carries and in which mode (copy/move)
- Translating pointer geometry over virtualized, filtered lists into
  global insertion positions
- Reconciling visual targets with the splice contract's coordinates
- Planning the remote operations for a finished drop
- Ephemeral drag session state
"""

from .drop_intent import (
    DropIntent,
    DropIntentInput,
    VirtualRow,
    compute_drop_intent,
    find_insertion_index,
    map_to_global_position,
    overlay_offset,
    rows_for_full_render,
)
from .planner import (
    AddOperation,
    DragSource,
    DropPlan,
    DropRequest,
    DropTarget,
    PanelInfo,
    PlayOperation,
    RemoveOperation,
    ReorderOperation,
    plan_drop,
    plan_same_list_reorders,
)
from .session import DragSession, DragSessionStore, EphemeralInsertion
from .source import (
    DndMode,
    DragSet,
    build_tracks_with_positions,
    can_perform_drop,
    determine_drag_tracks,
    determine_effective_mode,
    extract_ranges,
    get_browse_panel_drag_uris,
    get_track_positions,
    is_browse_panel_drop,
    is_contiguous_range,
    should_adjust_target_index,
    validate_drop_operation,
)
from .target_index import (
    adjust_insert_index_for_removal,
    calculate_effective_target_index,
    compute_adjusted_target_index,
    compute_insert_index,
)
