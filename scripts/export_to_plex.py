#!/usr/bin/env python3
"""
Recreate an M3U playlist on a Plex server.

Usage:
    python scripts/export_to_plex.py playlist.m3u --config config.yaml
    python scripts/export_to_plex.py playlist.m3u --title "Christmas Mix" --config config.yaml

Plex connection settings come from the `plex` section of the config file;
PLEX_TOKEN in the environment overrides the configured token.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from variant_shuffle.config_loader import Config
from variant_shuffle.logging_utils import add_logging_args, configure_logging, resolve_log_level
from variant_shuffle.m3u_exporter import read_playlist_paths
from variant_shuffle.plex_exporter import PlexExporter

logger = logging.getLogger('export_to_plex')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Plex playlist from an M3U file")
    parser.add_argument("playlist", help="M3U playlist to export")
    parser.add_argument("--title", help="Plex playlist title (default: playlist file name)")
    parser.add_argument("--config", metavar="YAML", help="YAML configuration with a plex section")
    add_logging_args(parser)
    return parser.parse_args(argv)


def build_exporter(config: Config) -> PlexExporter:
    if not config.plex_base_url or not config.plex_token:
        raise ValueError("plex.base_url and plex.token (or PLEX_TOKEN) must be configured")
    return PlexExporter(
        config.plex_base_url,
        config.plex_token,
        music_section=config.plex_music_section,
        verify_ssl=config.plex_verify_ssl,
        replace_existing=config.plex_replace_existing,
        path_map=config.plex_path_map,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=resolve_log_level(args), log_file=args.log_file)

    try:
        config = Config(args.config)
        exporter = build_exporter(config)
        paths = read_playlist_paths(args.playlist)
        title = args.title or Path(args.playlist).stem
        playlist_key = exporter.export_playlist(title, paths)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Plex export failed: {e}")
        return 1

    if not playlist_key:
        logger.error("Plex export failed: no playlist created")
        return 1
    logger.info(f"Exported '{title}' to Plex (key={playlist_key})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
