"""Runtime configuration for TAPEDECK, read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MUSIC_DIR = Path.home() / "Music"
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "tapedeck"


@dataclass
class AppConfig:
    """Paths and logging settings for the application.

    Attributes:
        music_dir: Directory scanned for audio files.
        data_dir: Directory holding playlists.json and the log file.
        log_level: Logging level for the file handler.
    """
    music_dir: Path = DEFAULT_MUSIC_DIR
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: int = logging.INFO

    @property
    def playlists_file(self) -> Path:
        return self.data_dir / "playlists.json"

    @property
    def log_file(self) -> Path:
        return self.data_dir / "tapedeck.log"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build configuration from TAPEDECK_* environment variables."""
        music_dir = os.environ.get("TAPEDECK_MUSIC_DIR")
        data_dir = os.environ.get("TAPEDECK_DATA_DIR")
        level_name = os.environ.get("TAPEDECK_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO

        return cls(
            music_dir=Path(music_dir).expanduser() if music_dir else DEFAULT_MUSIC_DIR,
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            log_level=level,
        )
