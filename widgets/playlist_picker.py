from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Label, ListItem, ListView, Static

from models.playlist import Playlist


class PlaylistPickerScreen(ModalScreen[str | None]):
    """Modal list of playlists. Dismisses with the chosen playlist id, or None."""

    DEFAULT_CSS = """
    PlaylistPickerScreen {
        align: center middle;
    }

    #picker-container {
        width: 50;
        height: auto;
        max-height: 80%;
        background: #1a1a1a;
        border: thick #cc5500;
        padding: 1 2;
    }

    #picker-title {
        color: #ff8c00;
        text-style: bold;
        padding: 0 0 1 0;
    }

    #picker-list {
        height: auto;
        max-height: 20;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, playlists: list[Playlist], song_title: str) -> None:
        super().__init__()
        self.playlists = playlists
        self.song_title = song_title

    def compose(self) -> ComposeResult:
        with Container(id="picker-container"):
            yield Label(f"Add '{self.song_title}' to…", id="picker-title")
            if not self.playlists:
                yield Static("No playlists yet", id="picker-empty")
            else:
                yield ListView(
                    *[ListItem(Label(p.name), name=p.id) for p in self.playlists],
                    id="picker-list",
                )

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        self.dismiss(event.item.name)

    def action_cancel(self) -> None:
        self.dismiss(None)
