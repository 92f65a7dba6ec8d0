from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import Callable, Optional, Protocol

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Label, ListItem, ListView, Static

from models.playlist import Playlist, PlaylistEntry
from models.song import Song, UNKNOWN_ALBUM, UNKNOWN_ARTIST
from services.music_library import MusicLibrary
from services.navigation import NavigationStack
from services.playlist_store import PlaylistStore, PlaylistStoreError
from styles import COLOR_MUTED
from widgets.collage import Collage
from widgets.text_prompt import TextPromptScreen

logger = logging.getLogger(__name__)

UNKNOWN_SONG = "Unknown Song"
HEADER_ART_COUNT = 4


class PlaybackController(Protocol):
    def play_song(self, song: Song, queue: list[Song]) -> None: ...


@dataclass(frozen=True)
class PlaylistRow:
    """A playlist entry paired with the song it resolved to."""
    song: Song
    date_added: datetime


def synthesize_song(entry: PlaylistEntry) -> Song:
    """Build a stand-in Song from the metadata cached on a playlist entry."""
    title = entry.title or entry.path.replace("\\", "/").split("/")[-1]
    extension = PurePosixPath(entry.path.replace("\\", "/")).suffix.lower() or ".mp3"
    return Song(
        title=title or UNKNOWN_SONG,
        artist=entry.artist or UNKNOWN_ARTIST,
        album=entry.album or UNKNOWN_ALBUM,
        file_path=entry.path,
        file_extension=extension,
        duration=0,
        online_art_url=entry.art_url,
        source_url=entry.source_url or "",
    )


def resolve_rows(playlist: Playlist, library: MusicLibrary) -> list[PlaylistRow]:
    """Resolve each entry against the library by exact path, in playlist order.

    Entries missing from the library fall back to a synthesized song.
    """
    rows = []
    for entry in playlist.entries:
        song = library.find_by_path(entry.path)
        if song is None:
            song = synthesize_song(entry)
        rows.append(PlaylistRow(song=song, date_added=entry.date_added))
    return rows


def header_art(rows: list[PlaylistRow]) -> tuple[list[str], list[Optional[str]]]:
    """Image paths and art URLs of the first four rows."""
    first = rows[:HEADER_ART_COUNT]
    return [row.song.file_path for row in first], [row.song.online_art_url for row in first]


def format_date_added(value: datetime) -> str:
    return value.strftime("%d-%m-%Y")


def row_subtitle(song: Song) -> str:
    if song.artist in (UNKNOWN_ARTIST, "Unknown"):
        return song.file_path
    return song.artist


class PlaylistRowItem(ListItem):
    """List row for one resolved playlist entry."""

    def __init__(self, row: PlaylistRow, position: int, **kwargs):
        super().__init__(**kwargs)
        self.row = row
        self.position = position

    def compose(self) -> ComposeResult:
        song = self.row.song
        with Horizontal(classes="row-line"):
            yield Label(Text(f"{self.position:>3}", style=f"bold {COLOR_MUTED}"), classes="row-number")
            with Vertical(classes="row-text"):
                yield Label(song.title, classes="row-title")
                yield Label(Text(row_subtitle(song), style=COLOR_MUTED), classes="row-subtitle")
            yield Label(Text(format_date_added(self.row.date_added), style=COLOR_MUTED), classes="row-date")
            yield Label(Text(song.duration_display, style=COLOR_MUTED), classes="row-duration")
            remove = Button("✕", classes="row-remove", variant="default")
            remove.can_focus = False
            yield remove


class PlaylistDetailView(Container):
    """One playlist's songs with a collage header and playlist actions."""

    DEFAULT_CSS = """
    PlaylistDetailView {
        background: #1a1a1a;
        border: solid #ff8c00;
        padding: 1;
    }

    #detail-header {
        height: 14;
    }

    #detail-art {
        layers: back front;
        width: 40;
        height: 12;
    }

    #detail-art-background {
        layer: back;
        width: 40;
        height: 12;
    }

    #detail-art-foreground {
        layer: front;
        offset: 8 2;
        width: 24;
        height: 8;
    }

    #detail-info {
        padding: 0 2;
    }

    #detail-title {
        color: #ff8c00;
        text-style: bold;
    }

    #detail-actions {
        height: auto;
        padding: 1 0 0 0;
    }

    #detail-actions > Button {
        margin: 0 1 0 0;
    }

    #detail-songs {
        height: 1fr;
    }

    PlaylistRowItem .row-line {
        height: 2;
    }

    PlaylistRowItem .row-number {
        width: 5;
    }

    PlaylistRowItem .row-text {
        width: 1fr;
    }

    PlaylistRowItem .row-date {
        width: 12;
    }

    PlaylistRowItem .row-duration {
        width: 6;
    }

    PlaylistRowItem .row-remove {
        min-width: 3;
        width: 5;
        height: 1;
        border: none;
    }

    #detail-empty, #detail-not-found {
        width: 100%;
        height: 1fr;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("b", "back", "Back", show=False),
        Binding("p", "play_all", "Play"),
        Binding("e", "rename", "Rename"),
        Binding("ctrl+d", "delete_playlist", "Delete Playlist"),
        Binding("delete", "remove_song", "Remove Song"),
        Binding("r", "remove_song", "Remove Song", show=False),
        Binding("j", "move_down", "Move down", show=False),
        Binding("k", "move_up", "Move up", show=False),
    ]

    def __init__(
        self,
        playlist_id: str,
        playlist_store: PlaylistStore,
        music_library: MusicLibrary,
        audio_player: PlaybackController,
        navigation: NavigationStack,
        **kwargs
    ):
        """Initialize the detail view for one playlist.

        Args:
            playlist_id: Id of the playlist to show.
            playlist_store: Source of playlists and target of rename/delete/remove commands.
            music_library: Index used to resolve entries by file path.
            audio_player: Receives play commands with the resolved queue.
            navigation: Stack popped by back and delete.
        """
        super().__init__(**kwargs)
        self.playlist_id = playlist_id
        self.playlist_store = playlist_store
        self.music_library = music_library
        self.audio_player = audio_player
        self.navigation = navigation
        self.rows: list[PlaylistRow] = []
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def playlist(self) -> Optional[Playlist]:
        return self.playlist_store.get(self.playlist_id)

    def compose(self) -> ComposeResult:
        playlist = self.playlist
        if playlist is None:
            self.rows = []
            yield Static(Text("Playlist not found", style=COLOR_MUTED), id="detail-not-found")
            return

        self.rows = resolve_rows(playlist, self.music_library)
        image_paths, art_urls = header_art(self.rows)

        with Horizontal(id="detail-header"):
            if image_paths:
                with Container(id="detail-art"):
                    yield Collage(image_paths, art_urls, id="detail-art-background", classes="blurred")
                    yield Collage(image_paths, art_urls, id="detail-art-foreground")
            with Vertical(id="detail-info"):
                yield Button("← Back", id="detail-back-button", variant="default")
                yield Label(playlist.name, id="detail-title")
                yield Label(Text(f"{len(self.rows)} songs", style=COLOR_MUTED), id="detail-count")
                with Horizontal(id="detail-actions"):
                    yield Button("▶ Play", id="detail-play-button", variant="success", disabled=not self.rows)
                    yield Button("Rename", id="detail-rename-button", variant="default")
                    yield Button("Delete Playlist", id="detail-delete-button", variant="error")

        if not self.rows:
            yield Static(Text("No songs added yet", style=COLOR_MUTED), id="detail-empty")
            return

        yield ListView(
            *[PlaylistRowItem(row, i + 1) for i, row in enumerate(self.rows)],
            id="detail-songs",
        )

    def on_mount(self) -> None:
        self._unsubscribers = [
            self.playlist_store.subscribe(self._on_store_changed),
            self.music_library.subscribe(self._on_store_changed),
        ]

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_store_changed(self) -> None:
        self.call_later(self.recompose)

    def focus_songs(self) -> None:
        """Focus the song list, or the first button when there is none."""
        for songs in self.query("#detail-songs"):
            songs.focus()
            return
        for button in self.query(Button):
            button.focus()
            return

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if event.button.has_class("row-remove"):
            event.stop()
            for item in event.button.ancestors:
                if isinstance(item, PlaylistRowItem):
                    self._remove_row(item.row)
                    break
            return

        if button_id == "detail-back-button":
            self.action_back()
        elif button_id == "detail-play-button":
            self.action_play_all()
        elif button_id == "detail-rename-button":
            self.action_rename()
        elif button_id == "detail-delete-button":
            self.action_delete_playlist()
        else:
            return
        event.stop()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        item = event.item
        if isinstance(item, PlaylistRowItem):
            self._play(item.row.song)

    def action_back(self) -> None:
        self.navigation.pop()

    def action_play_all(self) -> None:
        if not self.rows:
            return
        self._play(self.rows[0].song)

    def _play(self, song: Song) -> None:
        """Play song with every row as the queue, in display order."""
        queue = [row.song for row in self.rows]
        try:
            self.audio_player.play_song(song, queue)
        except Exception as e:
            logger.error(f"Error playing '{song.title}': {e}")
            self.notify(f"❌ Cannot play {song.title}", severity="error", timeout=3)

    def action_remove_song(self) -> None:
        highlighted = self._highlighted_row()
        if highlighted is None:
            return
        self._remove_row(highlighted)

    def _remove_row(self, row: PlaylistRow) -> None:
        try:
            self.playlist_store.remove_song_from_playlist(self.playlist_id, row.song.file_path)
        except PlaylistStoreError as e:
            logger.error(f"Error removing song from playlist: {e}")
            self.notify("❌ Cannot remove song", severity="error")

    def action_rename(self) -> None:
        playlist = self.playlist
        if playlist is None:
            return
        self.app.push_screen(
            TextPromptScreen("Rename Playlist", initial=playlist.name, confirm_label="Save"),
            callback=self._handle_rename,
        )

    def _handle_rename(self, name: str | None) -> None:
        if not name:
            return
        try:
            self.playlist_store.rename_playlist(self.playlist_id, name)
        except PlaylistStoreError as e:
            logger.error(f"Error renaming playlist: {e}")
            self.notify("❌ Cannot rename playlist", severity="error")

    def action_delete_playlist(self) -> None:
        try:
            self.playlist_store.delete_playlist(self.playlist_id)
        except PlaylistStoreError as e:
            logger.error(f"Error deleting playlist: {e}")
            self.notify("❌ Cannot delete playlist", severity="error")
        self.navigation.pop()

    def action_move_down(self) -> None:
        for songs in self.query("#detail-songs").results(ListView):
            songs.action_cursor_down()

    def action_move_up(self) -> None:
        for songs in self.query("#detail-songs").results(ListView):
            songs.action_cursor_up()

    def _highlighted_row(self) -> Optional[PlaylistRow]:
        for songs in self.query("#detail-songs").results(ListView):
            item = songs.highlighted_child
            if isinstance(item, PlaylistRowItem):
                return item.row
        return None
