from .song import Song
from .playback import PlaybackState
from .playlist import Playlist, PlaylistEntry, LIKED_SONGS
from .navigation import NavigationItem, NavigationType

__all__ = [
    "Song",
    "PlaybackState",
    "Playlist",
    "PlaylistEntry",
    "LIKED_SONGS",
    "NavigationItem",
    "NavigationType",
]
