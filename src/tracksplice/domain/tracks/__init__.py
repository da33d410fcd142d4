"""Tracks domain - playlist track models and snapshot codec."""

from .codec import (
    load_pages,
    pages_from_dict,
    pages_to_dict,
    save_pages,
    track_from_dict,
    track_to_dict,
)
from .models import InfinitePages, PlaylistPage, Track, TrackToRemove, track_position

__all__ = [
    "InfinitePages",
    "PlaylistPage",
    "Track",
    "TrackToRemove",
    "load_pages",
    "pages_from_dict",
    "pages_to_dict",
    "save_pages",
    "track_from_dict",
    "track_position",
    "track_to_dict",
]
