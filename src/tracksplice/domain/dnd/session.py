"""Ephemeral drag-and-drop session state.

Holds what exists only while a drag is in flight: the dragged tracks, the
live drop position and the "make room" insertion preview. None of it is
ever written into a playlist snapshot, so ending or cancelling a drag
leaves committed lists untouched.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from loguru import logger

from tracksplice.core.store import Store
from tracksplice.domain.tracks.models import Track

from .drop_intent import DropIntent, DropIntentInput, compute_drop_intent
from .source import DragSet


@dataclass(frozen=True)
class EphemeralInsertion:
    """Preview gap opened in the target panel while hovering."""

    active_id: str
    source_panel_id: Optional[str]
    target_panel_id: str
    insertion_index: int


@dataclass(frozen=True)
class DragSession:
    active_id: Optional[str] = None
    active_track: Optional[Track] = None
    source_panel_id: Optional[str] = None
    drag: Optional[DragSet] = None

    # Drop position, for the panel currently under the pointer
    active_panel_id: Optional[str] = None
    computed_drop_position: Optional[int] = None
    drop_indicator_index: Optional[int] = None
    ephemeral_insertion: Optional[EphemeralInsertion] = None

    # Snapshot taken at drag start; survives end_drag for the drop handler
    ordered_tracks_snapshot: tuple[Track, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.active_id is not None


IDLE_SESSION = DragSession()


class DragSessionStore:
    """Drag session behind a shared Store; one drag at a time."""

    def __init__(self) -> None:
        self.store: Store[DragSession] = Store(IDLE_SESSION)

    def get(self) -> DragSession:
        return self.store.get()

    def start_drag(
        self,
        active_id: str,
        track: Track,
        source_panel_id: Optional[str],
        drag: DragSet,
        ordered_tracks: Sequence[Track],
    ) -> DragSession:
        session = DragSession(
            active_id=active_id,
            active_track=track,
            source_panel_id=source_panel_id,
            drag=drag,
            ordered_tracks_snapshot=tuple(ordered_tracks),
        )
        self.store.set(session)
        logger.debug(f"Drag started: {active_id} ({len(drag)} track(s))")
        return session

    def update_drop_position(
        self, panel_id: Optional[str], intent: Optional[DropIntent]
    ) -> DragSession:
        """Record the drop intent for the panel under the pointer.

        A None intent (pointer over no droppable panel) clears the preview.
        """
        def reduce(session: DragSession) -> DragSession:
            if not session.is_active:
                return session
            if intent is None or panel_id is None:
                return replace(
                    session,
                    active_panel_id=None,
                    computed_drop_position=None,
                    drop_indicator_index=None,
                    ephemeral_insertion=None,
                )
            return replace(
                session,
                active_panel_id=panel_id,
                computed_drop_position=intent.insert_before_global,
                drop_indicator_index=intent.insertion_index_filtered,
                ephemeral_insertion=EphemeralInsertion(
                    active_id=session.active_id,
                    source_panel_id=session.source_panel_id,
                    target_panel_id=panel_id,
                    insertion_index=intent.insertion_index_filtered,
                ),
            )

        return self.store.update(reduce)

    def track_pointer(self, panel_id: str, data: DropIntentInput) -> Optional[DropIntent]:
        """Compute and record the drop intent for one panel's geometry.

        The input carries that panel's own scroll offset and rendered rows,
        so other panels showing the same list are unaffected.
        """
        if not self.get().is_active:
            return None
        intent = compute_drop_intent(data)
        self.update_drop_position(panel_id, intent)
        return intent

    def end_drag(self) -> DragSession:
        """Finish the drag.

        Returns:
            The session as it was at drop time (for planning the drop). The
            stored session keeps only the ordered-tracks snapshot.
        """
        final: list[DragSession] = []

        def reduce(session: DragSession) -> DragSession:
            final.append(session)
            return DragSession(ordered_tracks_snapshot=session.ordered_tracks_snapshot)

        self.store.update(reduce)
        return final[0]

    def cancel_drag(self) -> None:
        """Abort the drag and discard every piece of ephemeral state."""
        self.store.set(IDLE_SESSION)
        logger.debug("Drag cancelled")
