"""JSON conversion for cached playlist snapshots.

Snapshot files use camelCase keys as returned by the remote list service:
{"pages": [{"tracks": [...], "snapshotId": ..., "total": ..., "nextCursor": ...}],
 "pageParams": [...]}
"""

import json
from pathlib import Path
from typing import Any

from .models import InfinitePages, PlaylistPage, Track


def track_from_dict(data: dict[str, Any]) -> Track:
    """Build a Track from a JSON object.

    Raises:
        ValueError: If id or uri is missing
    """
    track_id = data.get("id") or data.get("uri")
    uri = data.get("uri") or data.get("id")
    if not track_id or not uri:
        raise ValueError(f"Track needs an id or uri: {data!r}")

    position = data.get("position")
    return Track(
        id=str(track_id),
        uri=str(uri),
        name=data.get("name", ""),
        artists=tuple(data.get("artists", ())),
        album=data.get("album"),
        duration_ms=int(data.get("durationMs", 0)),
        position=int(position) if position is not None else None,
    )


def track_to_dict(track: Track) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": track.id,
        "uri": track.uri,
        "name": track.name,
        "artists": list(track.artists),
        "durationMs": track.duration_ms,
        "position": track.position,
    }
    if track.album is not None:
        data["album"] = track.album
    return data


def pages_from_dict(data: dict[str, Any]) -> InfinitePages:
    """Build InfinitePages from a decoded snapshot document.

    A bare {"tracks": [...]} document is accepted as a single page.
    """
    raw_pages = data.get("pages")
    if raw_pages is None:
        raw_pages = [data]

    pages = []
    for raw in raw_pages:
        tracks = tuple(track_from_dict(t) for t in raw.get("tracks", []))
        pages.append(
            PlaylistPage(
                tracks=tracks,
                snapshot_id=str(raw.get("snapshotId", "")),
                total=int(raw.get("total", len(tracks))),
                next_cursor=raw.get("nextCursor"),
            )
        )

    page_params = tuple(data.get("pageParams", [None] * len(pages)))
    return InfinitePages(pages=tuple(pages), page_params=page_params)


def pages_to_dict(pages: InfinitePages) -> dict[str, Any]:
    return {
        "pages": [
            {
                "tracks": [track_to_dict(t) for t in page.tracks],
                "snapshotId": page.snapshot_id,
                "total": page.total,
                "nextCursor": page.next_cursor,
            }
            for page in pages.pages
        ],
        "pageParams": list(pages.page_params),
    }


def load_pages(path: Path) -> InfinitePages:
    """Load a snapshot file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If a track entry is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        return pages_from_dict(json.load(f))


def save_pages(pages: InfinitePages, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(pages_to_dict(pages), f, indent=2)
        f.write("\n")
