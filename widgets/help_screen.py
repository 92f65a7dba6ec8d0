from __future__ import annotations

from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Container, VerticalScroll
from textual.app import ComposeResult


GLOBAL_HELP = """[bold #ff8c00]🎵 TAPEDECK - Terminal Music Player[/bold #ff8c00]

[bold]VIEWS[/bold]
  1           Music library
  2           Playlists
  h/?         Show this help
  q           Quit application

[bold]PLAYBACK CONTROLS[/bold]
  Space       Play/Pause current song
  s           Stop playback
  ]           Next song
  [           Previous song
  +/=         Increase volume
  -           Decrease volume
  m           Toggle mute"""

VIEW_HELP = {
    "library": """[bold]LIBRARY[/bold]
  j/k         Move down/up in song list
  Enter       Play selected song
  l           Add to Liked Songs
  a           Add to a playlist
  • Music files are loaded from ~/Music (TAPEDECK_MUSIC_DIR)""",
    "playlists": """[bold]PLAYLISTS[/bold]
  Tab         Move between playlist cards
  Enter       Open playlist
  x           Delete playlist (asks first)
  Right click Delete playlist (asks first)
  n           New playlist
  • 📌 Liked Songs is always shown first""",
    "detail": """[bold]PLAYLIST[/bold]
  j/k         Move down/up in song list
  Enter       Play from selected song
  p           Play playlist
  Delete/r    Remove selected song
  Click ✕     Remove that song
  e           Rename playlist
  Ctrl+D      Delete playlist
  Esc/b       Back to playlists""",
}


class HelpScreen(ModalScreen[None]):
    """Modal screen displaying help information."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 90;
        height: 90%;
        background: #1a1a1a;
        border: thick #cc5500;
        padding: 1 2;
    }

    #help-scroll {
        width: 100%;
        height: 1fr;
        margin-bottom: 1;
    }

    #help-content {
        width: 100%;
        height: auto;
    }

    #help-close-button {
        width: 100%;
        height: auto;
        background: #2d2d2d;
        color: #ff8c00;
        border: solid #ff8c00;
        text-style: bold;
    }

    #help-close-button:hover {
        background: #3d3d3d;
        color: #ffb347;
    }

    #help-close-button:focus {
        border: solid #ffb347;
    }
    """

    def __init__(self, view_type: str = "playlists") -> None:
        """Initialize help screen.

        Args:
            view_type: "library", "playlists" or "detail" to show the matching section first.
        """
        super().__init__()
        self.view_type = view_type

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        with Container(id="help-container"):
            with VerticalScroll(id="help-scroll"):
                yield Static(self._help_text(), id="help-content")

            yield Button("Close (Esc)", id="help-close-button", variant="primary")

    def _help_text(self) -> str:
        """Global help followed by every view section, current view first."""
        order = [self.view_type] + [name for name in VIEW_HELP if name != self.view_type]
        sections = [VIEW_HELP[name] for name in order if name in VIEW_HELP]
        return "\n\n".join([GLOBAL_HELP, *sections])

    def on_mount(self) -> None:
        """Focus the button when screen mounts."""
        self.call_after_refresh(self._focus_button)

    def _focus_button(self) -> None:
        """Set focus to close button."""
        for button in self.query("#help-close-button").results(Button):
            button.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle close button press."""
        if event.button.id == "help-close-button":
            self.dismiss()

    async def on_key(self, event) -> None:
        """Handle key events."""
        if event.key == "escape":
            self.dismiss()
            event.prevent_default()
            event.stop()
        elif event.key == "j":
            scroll = self.query_one("#help-scroll", VerticalScroll)
            scroll.scroll_down()
            event.prevent_default()
            event.stop()
        elif event.key == "k":
            scroll = self.query_one("#help-scroll", VerticalScroll)
            scroll.scroll_up()
            event.prevent_default()
            event.stop()
