"""Track selection state - pure reducers plus a per-panel store.

Every reducer returns a new SelectionState; callers swap it in atomically.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from tracksplice.core.store import Store
from tracksplice.domain.tracks.models import Track

from .keys import get_track_selection_key


@dataclass(frozen=True)
class SelectionState:
    """Selected keys plus the anchor used for shift-click range selection."""

    selected_keys: frozenset[str] = field(default_factory=frozenset)
    last_selected_key: Optional[str] = None


EMPTY_SELECTION = SelectionState()


def toggle(state: SelectionState, key: str) -> SelectionState:
    """Toggle one key. Adding re-anchors to it; removing keeps the anchor
    unless the selection becomes empty."""
    if key in state.selected_keys:
        remaining = state.selected_keys - {key}
        return SelectionState(
            selected_keys=remaining,
            last_selected_key=state.last_selected_key if remaining else None,
        )
    return SelectionState(
        selected_keys=state.selected_keys | {key},
        last_selected_key=key,
    )


def select_single(key: str) -> SelectionState:
    return SelectionState(selected_keys=frozenset({key}), last_selected_key=key)


def select_many(keys: Sequence[str]) -> SelectionState:
    """Replace the selection with `keys`, anchored on the last one."""
    return SelectionState(
        selected_keys=frozenset(keys),
        last_selected_key=keys[-1] if keys else None,
    )


def select_range(
    state: SelectionState,
    ordered_tracks: Sequence[Track],
    clicked_key: str,
    anchor_key: Optional[str] = None,
) -> SelectionState:
    """Select the closed interval between the anchor and the clicked key.

    Walks the ordered, duplicate-aware list, so the interval is the same
    whichever direction the click goes. The anchor defaults to the state's
    last selected key. Falls back to selecting only the clicked key when
    there is no anchor or either key is not in the list.

    Returns:
        New selection holding exactly the interval, anchored on clicked_key
    """
    anchor = anchor_key if anchor_key is not None else state.last_selected_key
    if anchor is None:
        return select_single(clicked_key)

    keys = [get_track_selection_key(t, i) for i, t in enumerate(ordered_tracks)]
    try:
        anchor_index = keys.index(anchor)
        clicked_index = keys.index(clicked_key)
    except ValueError:
        return select_single(clicked_key)

    start = min(anchor_index, clicked_index)
    end = max(anchor_index, clicked_index)
    return SelectionState(
        selected_keys=frozenset(keys[start : end + 1]),
        last_selected_key=clicked_key,
    )


def add_many(state: SelectionState, keys: Sequence[str]) -> SelectionState:
    """Add keys to the selection, anchoring on the last key added."""
    return SelectionState(
        selected_keys=state.selected_keys | frozenset(keys),
        last_selected_key=keys[-1] if keys else state.last_selected_key,
    )


def remove_many(state: SelectionState, keys: Iterable[str]) -> SelectionState:
    remaining = state.selected_keys - frozenset(keys)
    return SelectionState(
        selected_keys=remaining,
        last_selected_key=state.last_selected_key if remaining else None,
    )


def clear() -> SelectionState:
    return EMPTY_SELECTION


def count(state: SelectionState) -> int:
    return len(state.selected_keys)


def is_selected(state: SelectionState, key: str) -> bool:
    return key in state.selected_keys


def selected_tracks_in_order(
    state: SelectionState, ordered_tracks: Sequence[Track]
) -> list[tuple[int, Track]]:
    """(index, track) pairs of selected tracks in ascending list order."""
    return [
        (i, t)
        for i, t in enumerate(ordered_tracks)
        if get_track_selection_key(t, i) in state.selected_keys
    ]


class PanelSelections:
    """Selection state for every panel, behind one shared Store.

    Panels are independent: changing one panel's selection never touches
    another's.
    """

    def __init__(self) -> None:
        self.store: Store[dict[str, SelectionState]] = Store({})

    def get(self, panel_id: str) -> SelectionState:
        return self.store.get().get(panel_id, EMPTY_SELECTION)

    def _apply(self, panel_id: str, reducer, *args) -> SelectionState:
        def reduce_panels(panels: dict[str, SelectionState]) -> dict[str, SelectionState]:
            current = panels.get(panel_id, EMPTY_SELECTION)
            updated = reducer(current, *args)
            if updated == current:
                return panels
            new_panels = dict(panels)
            if updated.selected_keys:
                new_panels[panel_id] = updated
            else:
                new_panels.pop(panel_id, None)
            return new_panels

        return self.store.update(reduce_panels).get(panel_id, EMPTY_SELECTION)

    def toggle(self, panel_id: str, key: str) -> SelectionState:
        return self._apply(panel_id, toggle, key)

    def select_single(self, panel_id: str, key: str) -> SelectionState:
        return self._apply(panel_id, lambda _state: select_single(key))

    def select_many(self, panel_id: str, keys: Sequence[str]) -> SelectionState:
        return self._apply(panel_id, lambda _state: select_many(keys))

    def select_range(
        self, panel_id: str, ordered_tracks: Sequence[Track], clicked_key: str
    ) -> SelectionState:
        return self._apply(panel_id, select_range, ordered_tracks, clicked_key)

    def add_many(self, panel_id: str, keys: Sequence[str]) -> SelectionState:
        return self._apply(panel_id, add_many, keys)

    def remove_many(self, panel_id: str, keys: Iterable[str]) -> SelectionState:
        return self._apply(panel_id, remove_many, keys)

    def clear(self, panel_id: str) -> SelectionState:
        return self._apply(panel_id, lambda _state: EMPTY_SELECTION)

    def count(self, panel_id: str) -> int:
        return count(self.get(panel_id))
