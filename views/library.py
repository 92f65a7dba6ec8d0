import logging
from typing import Callable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import ListView, ListItem, Label
from textual.containers import Container

from models.song import Song
from services.music_library import MusicLibrary
from services.playlist_store import PlaylistStore, PlaylistStoreError
from widgets.playlist_picker import PlaylistPickerScreen

logger = logging.getLogger(__name__)


class SongItem(ListItem):
    def __init__(self, song: Song, **kwargs):
        super().__init__(**kwargs)
        self.song = song

    def compose(self) -> ComposeResult:
        song = self.song
        yield Label(f"♪ {song.title} - {song.artist} ({song.album}) [{song.duration_display}]")


class LibraryView(Container):
    """Library view listing scanned songs with vim navigation."""

    DEFAULT_CSS = """
    LibraryView {
        background: #1a1a1a;
        border: solid #ff8c00;
        padding: 1;
    }

    LibraryView > Label {
        color: #ff8c00;
        text-style: bold;
        padding: 0 0 1 0;
    }
    """

    BINDINGS = [
        Binding("j", "move_down", "Move down", show=False),
        Binding("k", "move_up", "Move up", show=False),
        Binding("l", "like", "Like"),
        Binding("a", "add_to_playlist", "Add to Playlist"),
    ]

    def __init__(self, music_library: MusicLibrary, playlist_store: PlaylistStore, audio_player, **kwargs):
        super().__init__(**kwargs)
        self.music_library = music_library
        self.playlist_store = playlist_store
        self.audio_player = audio_player
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        """Compose the library view with a list of songs."""
        yield Label("🎵 Music Library")
        yield ListView(id="library-list")

    def on_mount(self) -> None:
        self._populate_list()
        self._unsubscribe = self.music_library.subscribe(self._populate_list)

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _populate_list(self) -> None:
        list_view = self.query_one("#library-list", ListView)
        list_view.clear()
        songs = self.music_library.get_songs()
        if not songs:
            list_view.append(ListItem(Label("No music files found")))
            return
        list_view.extend(SongItem(song) for song in songs)
        list_view.index = 0

    def _highlighted_song(self) -> Song | None:
        item = self.query_one("#library-list", ListView).highlighted_child
        return item.song if isinstance(item, SongItem) else None

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if not isinstance(event.item, SongItem):
            return
        song = event.item.song
        try:
            self.audio_player.play_song(song, self.music_library.get_songs())
        except Exception as e:
            logger.error(f"Error playing '{song.title}': {e}")
            self.notify(f"❌ Cannot play {song.title}", severity="error", timeout=3)

    def action_like(self) -> None:
        song = self._highlighted_song()
        if song is None:
            return
        try:
            self.playlist_store.add_to_liked_songs(song)
            self.notify(f"♥ Added to Liked Songs: {song.title}", timeout=2)
        except PlaylistStoreError as e:
            logger.error(f"Error adding to Liked Songs: {e}")
            self.notify("❌ Cannot update Liked Songs", severity="error")

    def action_add_to_playlist(self) -> None:
        song = self._highlighted_song()
        if song is None:
            return

        def handle_pick(playlist_id: str | None) -> None:
            if not playlist_id:
                return
            try:
                self.playlist_store.add_song_to_playlist(playlist_id, song)
                playlist = self.playlist_store.get(playlist_id)
                self.notify(f"✓ Added to {playlist.name if playlist else 'playlist'}", timeout=2)
            except PlaylistStoreError as e:
                logger.error(f"Error adding song to playlist: {e}")
                self.notify("❌ Cannot add song to playlist", severity="error")

        self.app.push_screen(
            PlaylistPickerScreen(self.playlist_store.playlists, song.title),
            callback=handle_pick,
        )

    def action_move_down(self) -> None:
        """Move selection down in the list (j key)."""
        self.query_one("#library-list", ListView).action_cursor_down()

    def action_move_up(self) -> None:
        """Move selection up in the list (k key)."""
        self.query_one("#library-list", ListView).action_cursor_up()
