from .collage import Collage
from .confirm_screen import ConfirmScreen
from .help_screen import HelpScreen
from .playlist_picker import PlaylistPickerScreen
from .text_prompt import TextPromptScreen

__all__ = [
    "Collage",
    "ConfirmScreen",
    "HelpScreen",
    "PlaylistPickerScreen",
    "TextPromptScreen",
]
