from textual.app import App, ComposeResult
from textual.widgets import Footer, ContentSwitcher
from textual.containers import Container
from textual.binding import Binding
import asyncio
import logging
import sys

from config import AppConfig
from models.navigation import NavigationType
from services.music_library import MusicLibrary
from services.navigation import NavigationStack
from services.playlist_store import PlaylistStore
from views import LibraryView, PlaylistGridView, PlaylistDetailView
from widgets import HelpScreen

TRACK_END_CHECK_INTERVAL = 0.5
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(config: AppConfig) -> None:
    """Send application logs to the log file under the data directory."""
    config.data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(config.log_file)
        ]
    )


class TapedeckApp(App):
    """A terminal music player with playlists, built with Textual."""

    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("1", "show_library", "Library"),
        Binding("2", "show_playlists", "Playlists"),
        Binding("space", "play_pause", "Play/Pause"),
        Binding("s", "stop", "Stop", show=False),
        Binding("]", "next_track", "Next", show=False),
        Binding("[", "previous_track", "Prev", show=False),
        Binding("+", "volume_up", "Vol+", show=False),
        Binding("=", "volume_up", "Vol+", show=False),
        Binding("-", "volume_down", "Vol-", show=False),
        Binding("m", "toggle_mute", "Mute", show=False),
        Binding("h", "show_help", "Help"),
        Binding("?", "show_help", "Help", show=False),
    ]

    def __init__(
        self,
        config: AppConfig | None = None,
        audio_player=None,
        playlist_store: PlaylistStore | None = None,
        music_library: MusicLibrary | None = None,
        navigation: NavigationStack | None = None,
        scan_on_mount: bool = True,
        **kwargs
    ):
        super().__init__(**kwargs)
        self.app_config = config or AppConfig.from_env()

        logger.info("Starting TAPEDECK application")

        if audio_player is None:
            from services.audio_player import AudioPlayer
            try:
                audio_player = AudioPlayer()
            except RuntimeError as e:
                logger.critical(f"Failed to initialize audio player: {e}")
                raise

        self.audio_player = audio_player
        self.playlist_store = playlist_store or PlaylistStore(self.app_config.playlists_file)
        self.music_library = music_library or MusicLibrary(self.app_config.music_dir)
        self.navigation = navigation or NavigationStack()
        self.scan_on_mount = scan_on_mount
        self._unsubscribe_navigation = None
        logger.info("Services initialized successfully")

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        with ContentSwitcher(id="view-switcher", initial="playlists-view"):
            yield LibraryView(self.music_library, self.playlist_store, self.audio_player, id="library-view")
            yield PlaylistGridView(self.playlist_store, self.navigation, id="playlists-view")
            yield Container(id="detail-slot")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the application."""
        self._unsubscribe_navigation = self.navigation.subscribe(self._on_navigation_changed)

        if self.scan_on_mount:
            self.run_worker(self._scan_library, exclusive=True)
            self.set_interval(TRACK_END_CHECK_INTERVAL, self._check_track_end)

    def on_unmount(self) -> None:
        if self._unsubscribe_navigation:
            self._unsubscribe_navigation()
            self._unsubscribe_navigation = None

    async def _scan_library(self) -> None:
        """Scan music library in background thread.

        Displays user-friendly error messages if scanning fails.
        """
        try:
            logger.info("Starting music library scan")
            songs = await asyncio.to_thread(self.music_library.load_songs)
            self.music_library.set_songs(songs)

            if len(songs) == 0:
                self.notify(
                    f"No music files found in {self.app_config.music_dir}\n\nAdd some audio files to get started!",
                    severity="warning",
                    timeout=8
                )
            else:
                self.notify(f"✓ Loaded {len(songs)} songs", severity="information", timeout=3)

        except FileNotFoundError as e:
            logger.error(f"Music directory not found: {e}")
            self.notify(
                "❌ Music directory not found\n\n"
                f"Please create {self.app_config.music_dir} and add some audio files.",
                severity="error",
                timeout=10
            )

        except PermissionError as e:
            logger.error(f"Permission denied accessing music directory: {e}")
            self.notify(
                "❌ Cannot access music directory\n\n"
                f"Please check directory permissions for {self.app_config.music_dir}",
                severity="error",
                timeout=10
            )

        except Exception as e:
            logger.error(f"Unexpected error during library scan: {type(e).__name__}: {e}")
            self.notify(
                f"❌ Error scanning music library\n\n{type(e).__name__}: {str(e)[:50]}",
                severity="error",
                timeout=10
            )

    def _on_navigation_changed(self) -> None:
        self.call_later(self._sync_navigation)

    async def _sync_navigation(self) -> None:
        """Show the view for the top of the navigation stack."""
        switcher = self.query_one("#view-switcher", ContentSwitcher)
        slot = self.query_one("#detail-slot", Container)
        await slot.remove_children()

        item = self.navigation.current
        if item is None or item.type != NavigationType.PLAYLIST:
            if switcher.current == "detail-slot":
                switcher.current = "playlists-view"
            return

        detail = PlaylistDetailView(
            item.data,
            self.playlist_store,
            self.music_library,
            self.audio_player,
            self.navigation,
            id="playlist-detail",
        )
        await slot.mount(detail)
        switcher.current = "detail-slot"
        detail.focus_songs()

    def _check_track_end(self) -> None:
        """Check if the song has ended and advance to next.

        Handles errors during auto-advance gracefully.
        """
        try:
            if self.audio_player.track_ended_naturally():
                logger.debug("Song ended naturally, advancing to next")
                self.audio_player.next_track()
        except Exception as e:
            logger.error(f"Error during track auto-advance: {e}")
            self.notify("❌ Error advancing to next song", severity="error", timeout=3)

    def action_show_library(self) -> None:
        self.navigation.clear()
        switcher = self.query_one("#view-switcher", ContentSwitcher)
        switcher.current = "library-view"
        self.query_one("#library-list").focus()

    def action_show_playlists(self) -> None:
        if self.navigation.current is not None:
            self.navigation.clear()
        else:
            switcher = self.query_one("#view-switcher", ContentSwitcher)
            switcher.current = "playlists-view"

    def action_play_pause(self) -> None:
        """Toggle play/pause state."""
        try:
            if self.audio_player.is_playing():
                self.audio_player.pause()
            else:
                self.audio_player.resume()
        except Exception as e:
            logger.error(f"Error toggling play/pause: {e}")

    def action_stop(self) -> None:
        """Stop playback."""
        self.audio_player.stop()

    def action_next_track(self) -> None:
        """Skip to next song.

        Displays error notification if the song cannot be played.
        """
        try:
            self.audio_player.next_track()
        except Exception as e:
            logger.error(f"Error skipping to next track: {e}")
            self.notify("❌ Cannot play next song", severity="error", timeout=3)

    def action_previous_track(self) -> None:
        """Skip to previous song.

        Displays error notification if the song cannot be played.
        """
        try:
            self.audio_player.previous_track()
        except Exception as e:
            logger.error(f"Error skipping to previous track: {e}")
            self.notify("❌ Cannot play previous song", severity="error", timeout=3)

    def action_volume_up(self) -> None:
        """Increase volume."""
        self.audio_player.increase_volume()
        volume_pct = int(self.audio_player.get_volume() * 100)
        self.notify(f"🔊 Volume ▲ {volume_pct}%", timeout=1.5)

    def action_volume_down(self) -> None:
        """Decrease volume."""
        self.audio_player.decrease_volume()
        volume_pct = int(self.audio_player.get_volume() * 100)
        mute_icon = "🔇" if volume_pct == 0 else "🔉"
        self.notify(f"{mute_icon} Volume ▼ {volume_pct}%", timeout=1.5)

    def action_toggle_mute(self) -> None:
        """Toggle mute state."""
        self.audio_player.toggle_mute()

        if self.audio_player.is_muted():
            self.notify("🔇 Muted", timeout=1.5)
        else:
            volume_pct = int(self.audio_player.get_volume() * 100)
            self.notify(f"🔊 Unmuted {volume_pct}%", timeout=1.5)

    def action_show_help(self) -> None:
        """Show help screen based on current view."""
        switcher = self.query_one("#view-switcher", ContentSwitcher)
        view_type = {
            "library-view": "library",
            "detail-slot": "detail",
        }.get(switcher.current, "playlists")
        self.push_screen(HelpScreen(view_type=view_type))


def main():
    """Entry point for the TAPEDECK application.

    Handles initialization errors and provides user-friendly error messages.
    """
    config = AppConfig.from_env()
    setup_logging(config)

    try:
        logger.info("=" * 60)
        logger.info("TAPEDECK starting up")
        logger.info("=" * 60)

        app = TapedeckApp(config=config)
        app.run()

        logger.info("TAPEDECK shut down cleanly")

    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ TAPEDECK cannot start\n")
        print(f"{e}\n")
        print(f"Check {config.log_file} for more details.\n")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("TAPEDECK interrupted by user")
        print("\n\nGoodbye! 👋\n")
        sys.exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ TAPEDECK encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {config.log_file} for more details.\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
