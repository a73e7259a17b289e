"""Tests for CSV and M3U track list loading."""
import pytest

from variant_shuffle.errors import InputFormatError
from variant_shuffle.track_loader import load_tracks


class TestCsvLoading:
    """CSV tables with a path column and optional weights."""

    def test_path_and_weight(self, write_csv):
        path = write_csv([
            ["path", "weight", "artist"],
            ["a/Silent Night.mp3", "3", "Enya"],
            ["b/Jingle Bells.mp3", "", "Frank Sinatra"],
        ])
        tracks = load_tracks(path)

        assert [t.path for t in tracks] == ["a/Silent Night.mp3", "b/Jingle Bells.mp3"]
        assert [t.weight for t in tracks] == [3.0, 1.0]
        assert tracks[0].original_row["artist"] == "Enya"

    @pytest.mark.parametrize("column", ["file_path", "File", "filename", "Location"])
    def test_alternative_path_columns(self, write_csv, column):
        tracks = load_tracks(write_csv([[column], ["song.mp3"]]))
        assert [t.path for t in tracks] == ["song.mp3"]

    @pytest.mark.parametrize("column", ["weights", "Count", "plays"])
    def test_alternative_weight_columns(self, write_csv, column):
        tracks = load_tracks(write_csv([["path", column], ["song.mp3", "7"]]))
        assert tracks[0].weight == 7.0

    def test_without_weight_column(self, write_csv):
        tracks = load_tracks(write_csv([["path"], ["a.mp3"], ["b.mp3"]]))
        assert all(t.weight == 1.0 for t in tracks)

    def test_blank_paths_dropped(self, write_csv):
        tracks = load_tracks(write_csv([["path", "weight"], ["", "4"], ["  ", "2"], ["a.mp3", "1"]]))
        assert [t.path for t in tracks] == ["a.mp3"]

    def test_missing_path_column(self, write_csv):
        with pytest.raises(ValueError, match="path column"):
            load_tracks(write_csv([["title", "artist"], ["Silent Night", "Enya"]]))

    def test_missing_path_column_is_input_format_error(self, write_csv):
        with pytest.raises(InputFormatError):
            load_tracks(write_csv([["title"], ["Silent Night"]]))

    def test_utf8_bom(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffpath\nNoël.mp3\n".encode("utf-8"))
        assert [t.path for t in load_tracks(path)] == ["Noël.mp3"]

    def test_duplicate_paths_kept(self, write_csv):
        tracks = load_tracks(write_csv([["path"], ["a.mp3"], ["a.mp3"]]))
        assert len(tracks) == 2


class TestPlaylistLoading:
    """M3U input."""

    def test_m3u_entries(self, tmp_path):
        path = tmp_path / "in.m3u"
        path.write_text("#EXTM3U\n#EXTINF:123,Enya - Silent Night\nHoliday/Silent Night.mp3\n\nHoliday/Jingle Bells.mp3\r\n")
        tracks = load_tracks(path)
        assert [t.path for t in tracks] == ["Holiday/Silent Night.mp3", "Holiday/Jingle Bells.mp3"]
        assert all(t.weight == 1.0 for t in tracks)

    def test_m3u8_suffix(self, tmp_path):
        path = tmp_path / "in.M3U8"
        path.write_text("a.mp3\n", encoding="utf-8")
        assert [t.path for t in load_tracks(path)] == ["a.mp3"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tracks(tmp_path / "nope.csv")
