from .library import LibraryView
from .playlists import PlaylistGridView
from .playlist_detail import PlaylistDetailView

__all__ = ["LibraryView", "PlaylistGridView", "PlaylistDetailView"]
