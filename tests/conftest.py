"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from variant_shuffle.tracks import Track

CHRISTMAS_PATHS = [
    "Christmas/01 - Run Rudolph Run - Chuck Berry.mp3",
    "Christmas/(02) Run Rudolph Run - Chuck Berry.mp3",
    "Christmas/21 - Bryan Adams - Run Rudolph Run.mp3",
    "Christmas/Bing Crosby - White Christmas.mp3",
    "Christmas/White Christmas - The Drifters.mp3",
    "Christmas/Silent Night.mp3",
]


@pytest.fixture()
def christmas_tracks():
    """A small library with two songs recorded more than once."""
    return [Track.from_raw(p) for p in CHRISTMAS_PATHS]


@pytest.fixture()
def variant_library():
    """Four songs with three versions each, distinct paths."""
    songs = ["Silent Night", "Jingle Bells", "Blue Christmas", "Feliz Navidad"]
    artists = ["Enya", "Frank Sinatra", "Elvis Presley"]
    return [
        Track.from_raw(f"Holiday/{song} - {artist}.mp3")
        for song in songs
        for artist in artists
    ]


@pytest.fixture()
def write_csv(tmp_path):
    """Write rows (first row = header) to a CSV file and return its path."""
    import csv

    def _write(rows, name="tracks.csv"):
        path = tmp_path / name
        with path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
        return path

    return _write
