from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


LIKED_SONGS = "Liked Songs"


def _from_millis(value: Any) -> datetime:
    try:
        millis = int(value or 0)
    except (TypeError, ValueError):
        millis = 0
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).astimezone()


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


@dataclass(frozen=True)
class PlaylistEntry:
    """A reference to a song inside a playlist.

    The optional fields cache the song's metadata at the time it was added,
    so the entry can still be shown when the file is no longer in the library.
    """
    path: str
    date_added: datetime
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    art_url: Optional[str] = None
    source_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "dateAdded": _to_millis(self.date_added),
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "artUrl": self.art_url,
            "sourceUrl": self.source_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaylistEntry":
        return cls(
            path=data.get("path") or "",
            date_added=_from_millis(data.get("dateAdded")),
            title=data.get("title"),
            artist=data.get("artist"),
            album=data.get("album"),
            art_url=data.get("artUrl"),
            source_url=data.get("sourceUrl"),
        )


@dataclass(frozen=True)
class Playlist:
    """A named, ordered collection of playlist entries."""
    id: str
    name: str
    entries: List[PlaylistEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @property
    def is_liked_songs(self) -> bool:
        return self.name == LIKED_SONGS

    def copy_with(
        self,
        name: Optional[str] = None,
        entries: Optional[List[PlaylistEntry]] = None,
    ) -> "Playlist":
        return replace(
            self,
            name=self.name if name is None else name,
            entries=list(self.entries) if entries is None else list(entries),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "entries": [entry.to_dict() for entry in self.entries],
            "createdAt": _to_millis(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playlist":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "Unknown",
            entries=[PlaylistEntry.from_dict(item) for item in data.get("entries") or []],
            created_at=_from_millis(data.get("createdAt")),
        )
