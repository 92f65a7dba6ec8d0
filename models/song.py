from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional


UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


def format_time(seconds: float) -> str:
    """Format seconds as M:SS."""
    if seconds is None or seconds < 0:
        seconds = 0
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class Song:
    """Represents a music track with metadata."""
    title: str
    artist: str
    album: str
    file_path: str
    file_extension: str = ""
    duration: float = 0.0  # Seconds
    online_art_url: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def duration_display(self) -> str:
        return format_time(self.duration)

    @classmethod
    def from_file(cls, file_path: Path, metadata: Dict[str, Any]) -> "Song":
        """Build a Song from a scanned file and its extracted tags.

        Args:
            file_path: Path of the audio file.
            metadata: Dict with title, artist, album and duration keys.

        Returns:
            Song for the file.
        """
        return cls(
            title=metadata.get("title") or file_path.stem,
            artist=metadata.get("artist") or UNKNOWN_ARTIST,
            album=metadata.get("album") or UNKNOWN_ALBUM,
            file_path=str(file_path),
            file_extension=file_path.suffix.lower(),
            duration=float(metadata.get("duration") or 0.0),
        )

    def copy_with(self, **changes: Any) -> "Song":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "filePath": self.file_path,
            "fileExtension": self.file_extension,
            "duration": self.duration,
            "sourceUrl": self.source_url,
            "onlineArtUrl": self.online_art_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Song":
        return cls(
            title=data.get("title") or UNKNOWN_TITLE,
            artist=data.get("artist") or UNKNOWN_ARTIST,
            album=data.get("album") or UNKNOWN_ALBUM,
            file_path=data.get("filePath") or "",
            file_extension=data.get("fileExtension") or "",
            duration=float(data.get("duration") or 0.0),
            source_url=data.get("sourceUrl"),
            online_art_url=data.get("onlineArtUrl"),
        )
