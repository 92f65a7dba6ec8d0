from enum import Enum


class PlaybackState(Enum):
    """Playback state of the audio player."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
