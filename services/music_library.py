import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

from mutagen import File as MutagenFile

from models.song import Song, UNKNOWN_ALBUM, UNKNOWN_ARTIST
from services.observable import Observable

logger = logging.getLogger(__name__)


class MusicLibrary(Observable):
    """Service for discovering music files and looking songs up by path."""

    SUPPORTED_EXTENSIONS = {'.mp3', '.flac', '.wav', '.ogg', '.m4a'}
    DEFAULT_MUSIC_DIR = Path.home() / "Music"

    def __init__(self, music_dir: Optional[Path] = None):
        """Initialize MusicLibrary with optional custom music directory.

        Args:
            music_dir: Path to music directory. Defaults to ~/Music if not provided.
        """
        super().__init__()
        self.music_dir = music_dir or self.DEFAULT_MUSIC_DIR
        self._songs: List[Song] = []
        self._by_path: Dict[str, Song] = {}

    def load_songs(self) -> List[Song]:
        """Read every supported audio file under the music directory.

        Does not touch the library state, so it is safe to run off the UI thread.
        Files whose metadata cannot be read are skipped.

        Raises:
            FileNotFoundError: If the music directory does not exist.
        """
        songs: List[Song] = []

        if not self.music_dir.exists():
            raise FileNotFoundError(f"Music directory not found: {self.music_dir}")

        audio_files = []
        for ext in self.SUPPORTED_EXTENSIONS:
            audio_files.extend(self.music_dir.rglob(f"*{ext}"))

        for file_path in audio_files:
            try:
                metadata = self._extract_metadata(file_path)
                songs.append(Song.from_file(file_path, metadata))
            except Exception:
                continue

        return songs

    def set_songs(self, songs: List[Song]) -> None:
        """Replace the library contents and notify subscribers."""
        self._songs = sorted(
            songs,
            key=lambda s: (s.artist.lower(), s.album.lower(), s.title.lower())
        )
        self._by_path = {song.file_path: song for song in self._songs}
        self._notify()

    def get_songs(self) -> List[Song]:
        """Return cached song list from the last scan."""
        return self._songs

    def find_by_path(self, path: str) -> Optional[Song]:
        """Return the library song whose file path equals path exactly, or None."""
        return self._by_path.get(path)

    @staticmethod
    def _extract_metadata(file_path: Path) -> Dict[str, Any]:
        """Extract metadata from audio file using mutagen.

        Args:
            file_path: Path to audio file.

        Returns:
            Dictionary containing title, artist, album, and duration.
            Uses fallbacks for missing tags.

        Raises:
            Exception: If file is corrupted or cannot be read.
        """
        try:
            audio = MutagenFile(file_path, easy=True)

            if audio is None:
                raise ValueError(f"Could not read audio file: {file_path}")

            tags = audio.tags or {}

            def first(key: str, default: str) -> str:
                if key not in tags:
                    return default
                value = tags[key]
                if isinstance(value, list):
                    return str(value[0]) if value else default
                return str(value)

            duration = 0.0
            if audio.info and hasattr(audio.info, 'length'):
                duration = float(audio.info.length)

            return {
                'title': first('title', file_path.stem),
                'artist': first('artist', UNKNOWN_ARTIST),
                'album': first('album', UNKNOWN_ALBUM),
                'duration': duration
            }

        except Exception as e:
            logger.warning(f"Could not extract metadata from {file_path}: {e}")
            raise
