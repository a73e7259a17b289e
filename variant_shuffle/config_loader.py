"""
Configuration Loader - Optional YAML configuration with environment overrides
"""
import os
from typing import Any, Dict, List, Optional

import yaml

from variant_shuffle.errors import InvalidConfigurationError
from variant_shuffle.shuffle.shuffler import DEFAULT_MIN_DISTANCE, MAX_FAILED_ATTEMPTS
from variant_shuffle.titles.grouping import DEFAULT_REPORT_EXAMPLES

DEFAULT_LIBRARY_ROOT = "/share/Music"


class Config:
    """
    Configuration manager for variant-shuffle.

    Every setting has a built-in default, so the YAML file is optional.
    CLI flags take precedence over anything read here.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config = self._load_config() if config_path else {}

    def _load_config(self) -> dict:
        """Load configuration from YAML file"""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Configuration file must contain a mapping: {self.config_path}")
        return data

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            section: Configuration section
            key: Configuration key
            default: Default value if not found
        """
        values = self.config.get(section)
        if not isinstance(values, dict):
            return default
        value = values.get(key, default)
        return default if value is None else value

    def get_word_list(self, section: str, key: str) -> List[str]:
        """A list of words; a single bare word is accepted as a one-item list."""
        value = self.get(section, key, [])
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise InvalidConfigurationError(f"{section}.{key} must be a list of words, got {value!r}")
        return [str(w) for w in value]

    # Shuffle
    @property
    def min_distance(self) -> int:
        """Minimum slots between two versions of the same song"""
        return int(self.get('shuffle', 'min_distance', DEFAULT_MIN_DISTANCE))

    @property
    def target_count(self) -> Optional[int]:
        """Output length; None means the input length"""
        value = self.get('shuffle', 'target_count')
        return int(value) if value is not None else None

    @property
    def seed(self) -> Optional[int]:
        value = self.get('shuffle', 'seed')
        return int(value) if value is not None else None

    @property
    def max_attempts(self) -> int:
        """Rejected draws tolerated before the distance rule is relaxed"""
        return int(self.get('shuffle', 'max_attempts', MAX_FAILED_ATTEMPTS))

    # Title heuristics
    @property
    def extra_song_openers(self) -> List[str]:
        return self.get_word_list('titles', 'extra_song_openers')

    @property
    def extra_non_song_openers(self) -> List[str]:
        return self.get_word_list('titles', 'extra_non_song_openers')

    @property
    def report_examples(self) -> int:
        """Example filenames shown per song in the grouping report"""
        return int(self.get('titles', 'report_examples', DEFAULT_REPORT_EXAMPLES))

    # Logging
    @property
    def log_level(self) -> str:
        return os.getenv('LOG_LEVEL') or self.get('logging', 'level', 'INFO')

    @property
    def log_file(self) -> Optional[str]:
        return os.getenv('LOG_FILE') or self.get('logging', 'file')

    # Link scripts
    @property
    def library_root(self) -> str:
        """Absolute prefix prepended to playlist entries when linking"""
        return self.get('links', 'library_root', DEFAULT_LIBRARY_ROOT)

    # Plex
    @property
    def plex_base_url(self) -> Optional[str]:
        return self.get('plex', 'base_url')

    @property
    def plex_token(self) -> Optional[str]:
        """Plex token (with environment variable override)"""
        return os.getenv('PLEX_TOKEN') or self.get('plex', 'token')

    @property
    def plex_music_section(self) -> Optional[str]:
        return self.get('plex', 'music_section')

    @property
    def plex_verify_ssl(self) -> bool:
        return bool(self.get('plex', 'verify_ssl', True))

    @property
    def plex_replace_existing(self) -> bool:
        return bool(self.get('plex', 'replace_existing', True))

    @property
    def plex_path_map(self) -> List[Dict[str, str]]:
        return list(self.get('plex', 'path_map', []))

    def __repr__(self) -> str:
        """String representation (hides sensitive data)"""
        return f"Config(path={self.config_path}, min_distance={self.min_distance}, plex={self.plex_base_url})"
