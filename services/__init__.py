from .music_library import MusicLibrary
from .navigation import NavigationStack
from .playlist_store import PlaylistStore, PlaylistStoreError

__all__ = [
    'MusicLibrary',
    'NavigationStack',
    'PlaylistStore',
    'PlaylistStoreError',
]
