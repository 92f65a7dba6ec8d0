import logging
import time
from typing import List

import pygame

from models.song import Song
from models.playback import PlaybackState

logger = logging.getLogger(__name__)


class AudioPlayer:
    """Service for audio playback with a play queue."""

    def __init__(self):
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            raise RuntimeError(f"Could not initialize audio output: {e}") from e

        self._queue: List[Song] = []
        self._current_index: int = -1
        self._volume: float = 0.7
        self._muted: bool = False
        self._state: PlaybackState = PlaybackState.STOPPED
        self._start_time: float = 0
        self._pause_position: float = 0

        pygame.mixer.music.set_volume(self._volume)

    def play_song(self, song: Song, queue: List[Song]) -> None:
        """Replace the queue and start playing song.

        The queue is kept in the given order; the current index is the
        position of song within it.
        """
        self._queue = list(queue)
        self._current_index = self._index_of(song)
        logger.info(f"Playing '{song.title}' with queue of {len(self._queue)}")
        self.play(song)

    def play(self, song: Song) -> None:
        """Load and play an audio file."""
        try:
            pygame.mixer.music.load(song.file_path)
            pygame.mixer.music.play()

            self._state = PlaybackState.PLAYING
            self._start_time = time.time()
            self._pause_position = 0
        except Exception:
            self._state = PlaybackState.STOPPED
            raise

    def pause(self) -> None:
        """Pause playback."""
        if self._state == PlaybackState.PLAYING:
            pygame.mixer.music.pause()
            self._state = PlaybackState.PAUSED
            self._pause_position = time.time() - self._start_time

    def resume(self) -> None:
        """Resume playback from paused state."""
        if self._state == PlaybackState.PAUSED:
            pygame.mixer.music.unpause()
            self._state = PlaybackState.PLAYING
            self._start_time = time.time() - self._pause_position

    def stop(self) -> None:
        """Stop playback and reset position."""
        pygame.mixer.music.stop()
        self._state = PlaybackState.STOPPED
        self._start_time = 0
        self._pause_position = 0

    def next_track(self) -> None:
        """Skip to next song in the queue."""
        if not self._queue:
            return

        if self._current_index < len(self._queue) - 1:
            self._current_index += 1
            self.play(self._queue[self._current_index])
        else:
            self.stop()

    def previous_track(self) -> None:
        """Restart the current song, or go back one if near its start."""
        if not self._queue:
            return

        if self.get_position() > 3.0 and self._current_index >= 0:
            self.play(self._queue[self._current_index])
        elif self._current_index > 0:
            self._current_index -= 1
            self.play(self._queue[self._current_index])

    def track_ended_naturally(self) -> bool:
        """True once when the mixer has finished the current song by itself."""
        if self._state == PlaybackState.PLAYING and not pygame.mixer.music.get_busy():
            self._state = PlaybackState.STOPPED
            return True
        return False

    def set_volume(self, level: float) -> None:
        """Set volume level (0.0 to 1.0)."""
        self._volume = max(0.0, min(1.0, level))
        if not self._muted:
            pygame.mixer.music.set_volume(self._volume)

    def increase_volume(self, amount: float = 0.05) -> None:
        self.set_volume(self._volume + amount)

    def decrease_volume(self, amount: float = 0.05) -> None:
        self.set_volume(self._volume - amount)

    def toggle_mute(self) -> None:
        self._muted = not self._muted
        pygame.mixer.music.set_volume(0.0 if self._muted else self._volume)

    def is_muted(self) -> bool:
        return self._muted

    def get_position(self) -> float:
        """Return current playback position in seconds."""
        if self._state == PlaybackState.PAUSED:
            return self._pause_position
        if self._state == PlaybackState.PLAYING:
            return time.time() - self._start_time
        return 0.0

    def get_volume(self) -> float:
        return self._volume

    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    def _index_of(self, song: Song) -> int:
        for i, queued in enumerate(self._queue):
            if queued.file_path == song.file_path:
                return i
        return -1
