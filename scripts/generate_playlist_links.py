#!/usr/bin/env python3
"""
Generate a symlink script from an M3U playlist.

Usage:
    python scripts/generate_playlist_links.py path/to/playlist.m3u /target/dir
    python scripts/generate_playlist_links.py playlist.m3u /target/dir --library-root /mnt/music

The generated script (linkfiles_<playlist>.sh, next to the playlist) creates
the target directory, links every playlist entry from the library root into
it, and writes a copy of the playlist that points at the links.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from variant_shuffle.config_loader import Config
from variant_shuffle.link_script import write_link_script
from variant_shuffle.logging_utils import add_logging_args, configure_logging, resolve_log_level

logger = logging.getLogger('generate_playlist_links')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a soft-link creation script from an M3U playlist")
    parser.add_argument("playlist", help="M3U playlist with library-relative entries")
    parser.add_argument("target_dir", help="Directory that will receive the links")
    parser.add_argument("--library-root", help="Absolute library location (default: config links.library_root)")
    parser.add_argument("--config", metavar="YAML", help="Optional YAML configuration file")
    add_logging_args(parser)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=resolve_log_level(args), log_file=args.log_file)

    try:
        config = Config(args.config)
        library_root = args.library_root or config.library_root
        script = write_link_script(args.playlist, args.target_dir, library_root)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"Run it with: {script}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
