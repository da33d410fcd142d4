"""
Tests for snapshot JSON conversion.
"""

import json

import pytest

from tracksplice.domain.tracks.codec import (
    load_pages,
    pages_from_dict,
    pages_to_dict,
    save_pages,
    track_from_dict,
)
from tracksplice.domain.tracks.models import Track, track_position


class TestTrackFromDict:
    """Test building tracks from JSON objects."""

    def test_full_track(self) -> None:
        """All camelCase fields are mapped."""
        track = track_from_dict(
            {
                "id": "t1",
                "uri": "spotify:track:t1",
                "name": "Hoffnung",
                "artists": ["Someone"],
                "album": "Album",
                "durationMs": 1000,
                "position": 9,
            }
        )

        assert track == Track(
            id="t1",
            uri="spotify:track:t1",
            name="Hoffnung",
            artists=("Someone",),
            album="Album",
            duration_ms=1000,
            position=9,
        )

    def test_uri_only_fills_id(self) -> None:
        """A track with only a uri uses it as id."""
        track = track_from_dict({"uri": "spotify:track:x"})
        assert track.id == "spotify:track:x"
        assert track.position is None

    def test_missing_id_and_uri_raises(self) -> None:
        """A track needs an id or uri."""
        with pytest.raises(ValueError, match="id or uri"):
            track_from_dict({"name": "nameless"})


class TestPagesCodec:
    """Test snapshot documents."""

    def test_bare_tracks_document_is_one_page(self) -> None:
        """{"tracks": [...]} is read as a single page."""
        pages = pages_from_dict({"tracks": [{"id": "a"}, {"id": "b"}]})

        assert len(pages.pages) == 1
        assert pages.pages[0].total == 2
        assert [t.id for t in pages.tracks] == ["a", "b"]

    def test_pages_keep_snapshot_and_cursor(self) -> None:
        """snapshotId, total and nextCursor survive conversion."""
        document = {
            "pages": [
                {"tracks": [{"id": "a"}], "snapshotId": "s1", "total": 3, "nextCursor": "c2"},
                {"tracks": [{"id": "b"}, {"id": "c"}], "snapshotId": "s1", "total": 3},
            ],
            "pageParams": [None, "c2"],
        }

        pages = pages_from_dict(document)
        written = pages_to_dict(pages)

        assert pages.page_params == (None, "c2")
        assert written["pages"][0]["nextCursor"] == "c2"
        assert written["pages"][1]["snapshotId"] == "s1"
        assert [t["id"] for t in written["pages"][1]["tracks"]] == ["b", "c"]

    def test_save_then_load(self, tmp_path) -> None:
        """Files written by save_pages load back identically."""
        pages = pages_from_dict({"tracks": [{"id": "a", "position": 0}]})
        path = tmp_path / "snap.json"

        save_pages(pages, path)

        assert load_pages(path) == pages
        assert json.loads(path.read_text())["pages"][0]["tracks"][0]["uri"] == "a"

    def test_load_invalid_json_raises(self, tmp_path) -> None:
        """Broken JSON surfaces as JSONDecodeError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(json.JSONDecodeError):
            load_pages(path)


class TestTrackPosition:
    """Test the position fallback."""

    def test_uses_position_when_known(self) -> None:
        """An explicit position wins over the view index."""
        assert track_position(Track(id="a", uri="a", position=7), 2) == 7

    def test_falls_back_to_index(self) -> None:
        """Without a position the view index is used."""
        assert track_position(Track(id="a", uri="a"), 2) == 2
