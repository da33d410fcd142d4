"""Selection domain - multi/range/toggle selection over duplicate-tolerant lists."""

from .keys import (
    KEY_DELIMITER,
    get_track_selection_key,
    make_selection_key,
    parse_selection_key,
)
from .model import (
    EMPTY_SELECTION,
    PanelSelections,
    SelectionState,
    add_many,
    clear,
    count,
    is_selected,
    remove_many,
    select_many,
    select_range,
    select_single,
    selected_tracks_in_order,
    toggle,
)

__all__ = [
    "EMPTY_SELECTION",
    "KEY_DELIMITER",
    "PanelSelections",
    "SelectionState",
    "add_many",
    "clear",
    "count",
    "get_track_selection_key",
    "is_selected",
    "make_selection_key",
    "parse_selection_key",
    "remove_many",
    "select_many",
    "select_range",
    "select_single",
    "selected_tracks_in_order",
    "toggle",
]
