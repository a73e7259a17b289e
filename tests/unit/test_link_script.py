"""Tests for symlink script generation."""
import os
import shlex

import pytest

from variant_shuffle.link_script import (
    build_link_script,
    link_script_path,
    to_posix_entry,
    write_link_script,
)


@pytest.fixture()
def playlist(tmp_path):
    path = tmp_path / "Christmas.m3u"
    path.write_text(
        "#EXTM3U\n"
        "Holiday/Enya/Silent Night.mp3\r\n"
        "Holiday\\Elvis\\Blue Christmas.mp3\n"
        "Loose Track.mp3\n",
        encoding="utf-8",
    )
    return path


class TestLinkScript:
    """Tests for build_link_script / write_link_script."""

    def test_header(self, playlist):
        lines = build_link_script(playlist, "/srv/links").splitlines()
        assert lines[0] == "#!/bin/bash"
        assert "TARGET_DIR=/srv/links" in lines
        assert "M3U_OUTPUT=/srv/links/Christmas.m3u" in lines
        assert 'echo "#EXTM3U" > "$M3U_OUTPUT"' in lines

    def test_link_commands(self, playlist):
        script = build_link_script(playlist, "/srv/links", "/share/Music")
        assert "mkdir -p \"$TARGET_DIR\"/Holiday/Enya" in script
        assert "ln -sf '/share/Music/Holiday/Enya/Silent Night.mp3' \"$TARGET_DIR\"/Holiday/Enya/'Silent Night.mp3'" in script
        assert "printf '%s\\n' \"$TARGET_DIR\"/Holiday/Enya/'Silent Night.mp3' >> \"$M3U_OUTPUT\"" in script

    def test_backslashes_converted(self, playlist):
        script = build_link_script(playlist, "/srv/links", "/mnt/lib/")
        assert "'/mnt/lib/Holiday/Elvis/Blue Christmas.mp3'" in script
        assert "\\" not in script.replace("%s\\n", "")

    def test_entry_without_directory(self, playlist):
        script = build_link_script(playlist, "/srv/links", "/share/Music")
        assert "ln -sf '/share/Music/Loose Track.mp3' \"$TARGET_DIR\"/'Loose Track.mp3'" in script

    def test_shell_quoting(self, tmp_path):
        path = tmp_path / "odd.m3u"
        path.write_text("Artist's Hits/It's $5 Christmas.mp3\n", encoding="utf-8")
        script = build_link_script(path, "/srv/links", "/share/Music")
        assert shlex.quote("/share/Music/Artist's Hits/It's $5 Christmas.mp3") in script
        assert shlex.quote("It's $5 Christmas.mp3") in script

    def test_write_script(self, playlist):
        output = write_link_script(playlist, "/srv/links")
        assert output == playlist.parent / "linkfiles_Christmas.m3u.sh"
        assert output == link_script_path(playlist)
        assert os.access(output, os.X_OK)
        assert output.read_text(encoding="utf-8").startswith("#!/bin/bash\n")

    def test_missing_playlist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_link_script(tmp_path / "missing.m3u", "/srv/links")

    def test_to_posix_entry(self):
        assert to_posix_entry("a\\b\\c.mp3\r") == "a/b/c.mp3"
