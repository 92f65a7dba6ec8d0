from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from models.playlist import LIKED_SONGS, Playlist, PlaylistEntry
from models.song import Song
from services.observable import Observable

logger = logging.getLogger(__name__)


class PlaylistStoreError(RuntimeError):
    """Raised when playlists cannot be written to disk."""


class PlaylistStore(Observable):
    """Service owning the user's playlists and their persistence.

    Playlists are immutable values; every mutation replaces the list,
    saves it and notifies subscribers.
    """

    STORAGE_KEY = "user_playlists_v2"

    def __init__(self, storage_file: Optional[Path] = None):
        """Initialize the store and load saved playlists.

        Args:
            storage_file: JSON file to persist to. Nothing is persisted when None.
        """
        super().__init__()
        self.storage_file = storage_file
        self._playlists: List[Playlist] = []
        self._load()

    @property
    def playlists(self) -> List[Playlist]:
        return list(self._playlists)

    def get(self, playlist_id: str) -> Optional[Playlist]:
        for playlist in self._playlists:
            if playlist.id == playlist_id:
                return playlist
        return None

    def create_playlist(self, name: str) -> Playlist:
        """Create an empty playlist.

        Raises:
            ValueError: If name is blank.
        """
        if not name or not name.strip():
            raise ValueError("Playlist name cannot be empty")

        playlist = Playlist(
            id=str(uuid.uuid4()),
            name=name,
            entries=[],
            created_at=datetime.now().astimezone(),
        )
        self._set([*self._playlists, playlist])
        logger.info(f"Created playlist '{name}' ({playlist.id})")
        return playlist

    def delete_playlist(self, playlist_id: str) -> None:
        self._set([p for p in self._playlists if p.id != playlist_id])
        logger.info(f"Deleted playlist {playlist_id}")

    def rename_playlist(self, playlist_id: str, new_name: str) -> None:
        """Rename a playlist.

        Raises:
            ValueError: If new_name is blank.
        """
        if not new_name or not new_name.strip():
            raise ValueError("Playlist name cannot be empty")

        self._set([
            p.copy_with(name=new_name) if p.id == playlist_id else p
            for p in self._playlists
        ])
        logger.info(f"Renamed playlist {playlist_id} to '{new_name}'")

    def add_song_to_playlist(self, playlist_id: str, song: Song) -> None:
        """Append a song unless its path is already in the playlist."""
        self.add_songs_to_playlist(playlist_id, [song])

    def add_songs_to_playlist(self, playlist_id: str, songs: Iterable[Song]) -> None:
        songs = list(songs)
        updated = []
        for playlist in self._playlists:
            if playlist.id != playlist_id:
                updated.append(playlist)
                continue

            entries = list(playlist.entries)
            seen = {entry.path for entry in entries}
            for song in songs:
                if song.file_path in seen:
                    logger.debug(f"Skipping duplicate {song.file_path} in {playlist_id}")
                    continue
                seen.add(song.file_path)
                entries.append(self._entry_for(song))
            updated.append(playlist.copy_with(entries=entries))

        self._set(updated)

    def remove_song_from_playlist(self, playlist_id: str, song_path: str) -> None:
        self._set([
            p.copy_with(entries=[e for e in p.entries if e.path != song_path])
            if p.id == playlist_id else p
            for p in self._playlists
        ])
        logger.debug(f"Removed {song_path} from playlist {playlist_id}")

    def add_to_liked_songs(self, song: Song) -> Playlist:
        """Add a song to "Liked Songs", creating the playlist if needed.

        Returns:
            The Liked Songs playlist after the song was added.
        """
        liked = next((p for p in self._playlists if p.name == LIKED_SONGS), None)
        if liked is None:
            liked = self.create_playlist(LIKED_SONGS)

        self.add_song_to_playlist(liked.id, song)
        return self.get(liked.id)

    @staticmethod
    def _entry_for(song: Song) -> PlaylistEntry:
        return PlaylistEntry(
            path=song.file_path,
            date_added=datetime.now().astimezone(),
            title=song.title,
            artist=song.artist,
            album=song.album,
            art_url=song.online_art_url,
            source_url=song.source_url,
        )

    def _set(self, playlists: List[Playlist]) -> None:
        self._playlists = playlists
        try:
            self._save()
        finally:
            self._notify()

    def _load(self) -> None:
        """Load playlists from disk. Corrupt or unreadable files leave the store empty."""
        if self.storage_file is None or not self.storage_file.exists():
            return

        try:
            data = json.loads(self.storage_file.read_text(encoding="utf-8"))
            self._playlists = [Playlist.from_dict(item) for item in data.get(self.STORAGE_KEY, [])]
            logger.info(f"Loaded {len(self._playlists)} playlists from {self.storage_file}")
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.error(f"Error loading playlists from {self.storage_file}: {e}")
            self._playlists = []

    def _save(self) -> None:
        if self.storage_file is None:
            return

        payload = {self.STORAGE_KEY: [p.to_dict() for p in self._playlists]}
        try:
            self.storage_file.parent.mkdir(parents=True, exist_ok=True)
            self.storage_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except PermissionError as e:
            logger.error(f"Permission denied writing playlists: {e}", exc_info=True)
            raise PlaylistStoreError(f"Permission denied: cannot write {self.storage_file}") from e
        except OSError as e:
            logger.error(f"Failed to write playlists (disk full or I/O error): {e}", exc_info=True)
            raise PlaylistStoreError(f"Failed to save playlists: {e}") from e
