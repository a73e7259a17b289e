"""
Symlink script generation.

Turns an M3U playlist of library-relative paths into a bash script that
mirrors the playlist's files as symbolic links under a target directory and
writes a matching playlist there. The script is generated, not executed, so
it can be reviewed and run on the machine that holds the library.
"""
import logging
import os
import shlex
import stat
from pathlib import Path, PurePosixPath
from typing import List, Union

from variant_shuffle.config_loader import DEFAULT_LIBRARY_ROOT
from variant_shuffle.m3u_exporter import M3U_HEADER, read_playlist_paths

logger = logging.getLogger(__name__)


def to_posix_entry(entry: str) -> str:
    """Windows separators to "/", carriage returns removed."""
    return entry.replace("\\", "/").replace("\r", "")


def _link_commands(entry: str, library_root: str) -> List[str]:
    posix = PurePosixPath(to_posix_entry(entry).lstrip("/"))
    source = f"{library_root.rstrip('/')}/{posix}"
    relative_dir = str(posix.parent)

    if relative_dir and relative_dir != ".":
        dest_dir = f'"$TARGET_DIR"/{shlex.quote(relative_dir)}'
    else:
        dest_dir = '"$TARGET_DIR"'
    dest = f"{dest_dir}/{shlex.quote(posix.name)}"
    return [
        f"mkdir -p {dest_dir}",
        f"ln -sf {shlex.quote(source)} {dest}",
        f'printf \'%s\\n\' {dest} >> "$M3U_OUTPUT"',
    ]


def build_link_script(
    playlist_path: Union[str, Path],
    target_dir: str,
    library_root: str = DEFAULT_LIBRARY_ROOT,
) -> str:
    """
    Render the link script for a playlist.

    Args:
        playlist_path: M3U playlist with library-relative entries
        target_dir: Directory that will receive the links and the new playlist
        library_root: Absolute prefix where the library lives

    Returns:
        Script text
    """
    playlist_path = Path(playlist_path)
    entries = read_playlist_paths(playlist_path)
    m3u_output = f"{target_dir.rstrip('/')}/{playlist_path.name}"

    lines = [
        "#!/bin/bash",
        "",
        "# Auto-generated script to create soft links for playlist files",
        f"# Target directory: {target_dir}",
        "",
        f"TARGET_DIR={shlex.quote(target_dir)}",
        f"M3U_OUTPUT={shlex.quote(m3u_output)}",
        "",
        'mkdir -p "$TARGET_DIR"',
        f'echo "{M3U_HEADER}" > "$M3U_OUTPUT"',
        "",
        'echo "Creating soft links in $TARGET_DIR..."',
        "",
    ]
    for entry in entries:
        lines.extend(_link_commands(entry, library_root))

    lines.extend([
        "",
        'echo "Soft link creation complete!"',
        'echo "Playlist created: $M3U_OUTPUT"',
    ])
    logger.debug("Link script for %s: %d entries", playlist_path.name, len(entries))
    return "\n".join(lines) + "\n"


def link_script_path(playlist_path: Union[str, Path]) -> Path:
    playlist_path = Path(playlist_path)
    return playlist_path.parent / f"linkfiles_{playlist_path.name}.sh"


def write_link_script(
    playlist_path: Union[str, Path],
    target_dir: str,
    library_root: str = DEFAULT_LIBRARY_ROOT,
) -> Path:
    """Write `linkfiles_<playlist>.sh` next to the playlist and make it executable."""
    script = build_link_script(playlist_path, target_dir, library_root)
    output = link_script_path(playlist_path)
    with open(output, "w", encoding="utf-8", newline="\n") as f:
        f.write(script)
    mode = os.stat(output).st_mode
    os.chmod(output, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    logger.info("Generated script: %s", output)
    return output
