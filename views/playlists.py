from __future__ import annotations

import logging
from typing import Callable, Sequence

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Label, Static

from models.navigation import NavigationItem, NavigationType
from models.playlist import LIKED_SONGS, Playlist
from services.navigation import NavigationStack
from services.playlist_store import PlaylistStore, PlaylistStoreError
from styles import COLOR_MUTED, COLOR_PRIMARY
from widgets.collage import Collage
from widgets.confirm_screen import ConfirmScreen
from widgets.text_prompt import TextPromptScreen

logger = logging.getLogger(__name__)

CARD_WIDTH = 28
PIN_ICON = "📌"


def sort_for_display(playlists: Sequence[Playlist]) -> list[Playlist]:
    """Return playlists with "Liked Songs" pinned first.

    The sort is stable, so every other playlist keeps its relative order.
    """
    return sorted(playlists, key=lambda p: 0 if p.name == LIKED_SONGS else 1)


def card_name(playlist: Playlist) -> Text:
    """Card title, with a pin in front of Liked Songs."""
    name = Text()
    if playlist.is_liked_songs:
        name.append(f"{PIN_ICON} ", style=COLOR_PRIMARY)
    name.append(playlist.name)
    return name


def song_count(playlist: Playlist) -> str:
    return f"{len(playlist.entries)} songs"


class PlaylistCard(Vertical):
    """Grid card for one playlist: collage, name and song count."""

    can_focus = True

    DEFAULT_CSS = """
    PlaylistCard {
        width: 26;
        height: auto;
        background: #2d2d2d;
        border: round #333333;
        padding: 0 1;
    }

    PlaylistCard:focus {
        border: round #ff8c00;
    }

    PlaylistCard > Collage {
        width: 100%;
        height: 8;
    }

    PlaylistCard > .card-name {
        width: 100%;
        text-style: bold;
        padding: 1 0 0 0;
    }

    PlaylistCard > .card-count {
        color: #888888;
    }
    """

    BINDINGS = [
        Binding("enter", "open", "Open"),
        Binding("x", "request_delete", "Delete"),
    ]

    class Opened(Message):
        """Card was tapped."""

        def __init__(self, playlist_id: str) -> None:
            super().__init__()
            self.playlist_id = playlist_id

    class DeleteRequested(Message):
        """Card's context action was used."""

        def __init__(self, playlist: Playlist) -> None:
            super().__init__()
            self.playlist = playlist

    def __init__(self, playlist: Playlist, **kwargs):
        super().__init__(**kwargs)
        self.playlist = playlist

    def compose(self) -> ComposeResult:
        entries = self.playlist.entries[:4]
        yield Collage(
            [entry.path for entry in entries],
            [entry.art_url for entry in entries],
        )

        yield Label(card_name(self.playlist), classes="card-name")
        yield Label(song_count(self.playlist), classes="card-count")

    def on_click(self, event: events.Click) -> None:
        event.stop()
        if event.button == 3:
            self.post_message(self.DeleteRequested(self.playlist))
        else:
            self.post_message(self.Opened(self.playlist.id))

    def action_open(self) -> None:
        self.post_message(self.Opened(self.playlist.id))

    def action_request_delete(self) -> None:
        self.post_message(self.DeleteRequested(self.playlist))


class PlaylistGridView(Container):
    """All playlists as a card grid, with create and delete dialogs."""

    DEFAULT_CSS = """
    PlaylistGridView {
        background: #1a1a1a;
        border: solid #ff8c00;
        padding: 1;
    }

    #playlists-toolbar {
        height: auto;
        padding: 0 0 1 0;
    }

    #playlists-title {
        width: 1fr;
        color: #ff8c00;
        text-style: bold;
    }

    #playlists-grid {
        layout: grid;
        grid-size: 4;
        grid-gutter: 1 2;
        grid-rows: auto;
        height: 1fr;
    }

    #playlists-empty {
        align: center middle;
        height: 1fr;
    }

    #playlists-empty > Static {
        width: 100%;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("n", "new_playlist", "New Playlist"),
    ]

    def __init__(self, playlist_store: PlaylistStore, navigation: NavigationStack, **kwargs):
        """Initialize the grid with its stores.

        Args:
            playlist_store: Source of playlists and target of create/delete commands.
            navigation: Stack receiving a playlist item when a card is opened.
        """
        super().__init__(**kwargs)
        self.playlist_store = playlist_store
        self.navigation = navigation
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="playlists-toolbar"):
            yield Label("🎶 Playlists", id="playlists-title")
            yield Button("+ New Playlist", id="new-playlist-button", variant="primary")

        playlists = sort_for_display(self.playlist_store.playlists)
        if not playlists:
            with Vertical(id="playlists-empty"):
                yield Static(Text("♫", style=COLOR_MUTED))
                yield Static(Text("No playlists yet", style=COLOR_MUTED), id="playlists-empty-label")
            return

        with VerticalScroll(id="playlists-grid"):
            for playlist in playlists:
                yield PlaylistCard(playlist)

    def on_mount(self) -> None:
        self._unsubscribe = self.playlist_store.subscribe(self._on_playlists_changed)
        self._apply_columns(self.size.width)

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def on_resize(self, event: events.Resize) -> None:
        self._apply_columns(event.size.width)

    def _apply_columns(self, width: int) -> None:
        columns = max(1, width // CARD_WIDTH)
        for grid in self.query("#playlists-grid"):
            grid.styles.grid_size_columns = columns

    def _on_playlists_changed(self) -> None:
        self.call_later(self._rebuild)

    async def _rebuild(self) -> None:
        await self.recompose()
        self._apply_columns(self.size.width)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-playlist-button":
            event.stop()
            self.action_new_playlist()

    def on_playlist_card_opened(self, event: PlaylistCard.Opened) -> None:
        event.stop()
        logger.debug(f"Opening playlist {event.playlist_id}")
        self.navigation.push(NavigationItem(NavigationType.PLAYLIST, event.playlist_id))

    def on_playlist_card_delete_requested(self, event: PlaylistCard.DeleteRequested) -> None:
        event.stop()
        playlist = event.playlist

        def handle_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                logger.debug(f"Delete of playlist {playlist.id} cancelled")
                return
            try:
                self.playlist_store.delete_playlist(playlist.id)
            except PlaylistStoreError as e:
                logger.error(f"Error deleting playlist: {e}")
                self.notify("❌ Cannot delete playlist", severity="error")

        self.app.push_screen(
            ConfirmScreen("Delete Playlist?", f"Delete '{playlist.name}'?", confirm_label="Delete"),
            callback=handle_confirm,
        )

    def action_new_playlist(self) -> None:
        self.app.push_screen(
            TextPromptScreen("New Playlist", placeholder="Playlist Name", confirm_label="Create"),
            callback=self._handle_new_playlist_name,
        )

    def _handle_new_playlist_name(self, name: str | None) -> None:
        if not name:
            return
        try:
            self.playlist_store.create_playlist(name)
        except PlaylistStoreError as e:
            logger.error(f"Error creating playlist: {e}")
            self.notify("❌ Cannot create playlist", severity="error")
