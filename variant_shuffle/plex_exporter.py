"""
Plex Playlist Exporter - Recreates a shuffled playlist on a Plex server.

Local playlist paths are matched to Plex library items by file path, after
optional prefix rewriting for libraries mounted at different locations.
"""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000
TRACK_TYPE = 10


def normalize_media_path(path: str) -> str:
    """Case- and separator-insensitive form of a path for matching."""
    return os.path.normcase(path.replace("\\", "/")).rstrip("/").lower()


class PlexExporter:
    """Creates audio playlists on a Plex server from local track paths."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        music_section: Optional[str] = None,
        verify_ssl: bool = True,
        timeout: int = 15,
        replace_existing: bool = True,
        path_map: Optional[List[Dict[str, str]]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.music_section = music_section
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.replace_existing = replace_existing
        self.path_map = [
            (normalize_media_path(entry["from"]), entry["to"])
            for entry in (path_map or [])
            if entry.get("from") and entry.get("to")
        ]
        self.session = session or requests.Session()
        self._section_key: Optional[str] = None
        self._machine_id: Optional[str] = None
        self._path_index: Optional[Dict[str, str]] = None

    def map_path(self, path: str) -> str:
        """Apply the first matching prefix rewrite and normalize."""
        norm = normalize_media_path(path)
        for src, dst in self.path_map:
            if norm == src or norm.startswith(src + "/"):
                return normalize_media_path(dst.rstrip("\\/") + norm[len(src):])
        return norm

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        allow_empty: bool = False,
    ) -> Optional[ET.Element]:
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers={"X-Plex-Token": self.token},
            params=params,
            timeout=self.timeout,
            verify=self.verify_ssl,
        )
        if resp.status_code >= 400:
            raise RuntimeError(f"Plex API request failed ({resp.status_code}) for {path}")
        if not resp.text or not resp.text.strip():
            if allow_empty:
                return None
            raise RuntimeError(f"Empty response from Plex API for {path}")
        try:
            return ET.fromstring(resp.text)
        except ET.ParseError as exc:
            logger.debug("Plex response that failed to parse: %s", resp.text[:500])
            raise RuntimeError(f"Failed to parse Plex XML response for {path}") from exc

    def _get_machine_id(self) -> str:
        if not self._machine_id:
            machine_id = self._request("GET", "/").get("machineIdentifier")
            if not machine_id:
                raise RuntimeError("Plex machineIdentifier not found")
            self._machine_id = machine_id
        return self._machine_id

    def _get_music_section_key(self) -> str:
        if self._section_key:
            return self._section_key
        root = self._request("GET", "/library/sections")
        for directory in root.findall(".//Directory"):
            if directory.get("type") != "artist" or not directory.get("key"):
                continue
            title = (directory.get("title") or "").lower()
            if self.music_section is None or title == self.music_section.lower():
                self._section_key = directory.get("key")
                return self._section_key
        raise RuntimeError("Plex music library section not found")

    def build_path_index(self) -> Dict[str, str]:
        """Normalized file path -> ratingKey for every track in the music section."""
        if self._path_index is not None:
            return self._path_index
        section_key = self._get_music_section_key()
        index: Dict[str, str] = {}
        start = 0
        while True:
            root = self._request(
                "GET",
                f"/library/sections/{section_key}/all",
                params={
                    "type": TRACK_TYPE,
                    "X-Plex-Container-Start": start,
                    "X-Plex-Container-Size": PAGE_SIZE,
                },
            )
            tracks = root.findall(".//Track")
            for track in tracks:
                rating_key = track.get("ratingKey")
                for part in track.findall(".//Part"):
                    part_file = part.get("file")
                    if rating_key and part_file:
                        index.setdefault(normalize_media_path(part_file), rating_key)
            start += PAGE_SIZE
            total = root.get("totalSize")
            if len(tracks) < PAGE_SIZE or (total is not None and total.isdigit() and start >= int(total)):
                break
        self._path_index = index
        logger.info("Plex path index ready (%d tracks)", len(index))
        return index

    def match_paths(self, paths: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Split playlist paths into (rating keys found, paths not found)."""
        index = self.build_path_index()
        keys: List[str] = []
        missing: List[str] = []
        for path in paths:
            key = index.get(self.map_path(path))
            if key:
                keys.append(key)
            else:
                missing.append(path)
                logger.debug("No Plex match for %s", PurePath(path).name)
        return keys, missing

    def _find_playlist_key(self, title: str) -> Optional[str]:
        root = self._request("GET", "/playlists")
        for playlist in root.findall(".//Playlist"):
            if (playlist.get("title") or "") == title:
                return playlist.get("ratingKey")
        return None

    def export_playlist(self, title: str, paths: Sequence[str]) -> Optional[str]:
        """
        Create (or replace) a Plex audio playlist.

        Returns:
            ratingKey of the new playlist, or None if nothing could be matched
        """
        if not paths:
            logger.warning("Skipping Plex export (no tracks in playlist)")
            return None

        rating_keys, missing = self.match_paths(paths)
        if not rating_keys:
            logger.warning("Skipping Plex export (no tracks matched in Plex library)")
            return None
        if missing:
            logger.warning("Plex export skipped %d tracks with no match", len(missing))

        if self.replace_existing:
            existing_key = self._find_playlist_key(title)
            if existing_key:
                logger.info("Replacing existing Plex playlist '%s' (key=%s)", title, existing_key)
                self._request("DELETE", f"/playlists/{existing_key}", allow_empty=True)

        uri = (
            f"server://{self._get_machine_id()}/com.plexapp.plugins.library"
            f"/library/metadata/{','.join(rating_keys)}"
        )
        root = self._request(
            "POST",
            "/playlists",
            params={"type": "audio", "title": title, "smart": 0, "uri": uri},
        )
        playlist = root.find(".//Playlist")
        if playlist is None:
            return None
        logger.info("Created Plex playlist '%s' with %d tracks", title, len(rating_keys))
        return playlist.get("ratingKey")
