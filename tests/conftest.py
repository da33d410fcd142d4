"""Shared fixtures for tracksplice tests."""

import pytest

from helpers import make_tracks
from tracksplice.domain.tracks.models import Track


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep config, data and log files out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("TRACKSPLICE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TRACKSPLICE_DND_MODE", raising=False)
    return tmp_path


@pytest.fixture
def five_tracks() -> list[Track]:
    return make_tracks(["A", "B", "C", "D", "E"])


HOFFNUNG_NAMES = [
    "Day Old Thoughts",
    "Lose Control",
    "Blue Left Hand",
    "Keep Me Satisfied",
    "Lack again",
    "Not Feeling Up",
    "Hoffnung",
    "Dast",
    "Rodeo",
    "Alles was ich will",
    "denkst du an mich?",
]


@pytest.fixture
def hoffnung_tracks() -> list[Track]:
    """Eleven tracks; positions 4, 5, 6 are the ones usually dragged."""
    return [
        Track(id=chr(ord("a") + i), uri=f"spotify:track:{chr(ord('a') + i)}", name=name, position=i)
        for i, name in enumerate(HOFFNUNG_NAMES)
    ]
