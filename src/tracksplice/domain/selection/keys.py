"""Selection keys that keep duplicate tracks distinguishable.

A key combines track id and playlist position as "<id>::<position>", so the
same track at two positions yields two different keys.
"""

from typing import Optional

from tracksplice.domain.tracks.models import Track, track_position

KEY_DELIMITER = "::"


def make_selection_key(track_id: str, position: int) -> str:
    return f"{track_id}{KEY_DELIMITER}{position}"


def get_track_selection_key(track: Track, index: int) -> str:
    """Selection key for a track shown at view index `index`.

    Uses the track's global position when known, otherwise the index.
    """
    return make_selection_key(track.id or track.uri, track_position(track, index))


def parse_selection_key(key: str) -> Optional[tuple[str, int]]:
    """Split a selection key back into (id, position).

    Splits on the last delimiter so the position suffix is unambiguous.

    Returns:
        (track_id, position), or None when the key is malformed (missing
        delimiter, empty id, or non-numeric position)
    """
    if not isinstance(key, str):
        return None

    track_id, sep, suffix = key.rpartition(KEY_DELIMITER)
    if not sep or not track_id:
        return None
    if not (suffix.isascii() and suffix.isdigit()):
        return None

    return track_id, int(suffix)
