from __future__ import annotations

import logging
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

logger = logging.getLogger(__name__)


class TextPromptScreen(ModalScreen[str | None]):
    """Modal screen asking for a single line of text.

    Dismisses with the stripped text when confirmed, or None when cancelled,
    so both new and renamed playlist names are stored trimmed.
    Confirming with blank text does nothing and keeps the screen open.
    """

    DEFAULT_CSS = """
    TextPromptScreen {
        align: center middle;
    }

    #text-prompt-container {
        width: 60;
        height: auto;
        background: #1a1a1a;
        border: thick #cc5500;
        padding: 1 2;
    }

    #text-prompt-title {
        color: #ff8c00;
        text-style: bold;
        padding: 0 0 1 0;
    }

    #text-prompt-buttons {
        height: auto;
        align: right middle;
        padding: 1 0 0 0;
    }

    #text-prompt-buttons > Button {
        margin: 0 0 0 1;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        title: str,
        initial: str = "",
        placeholder: str = "",
        confirm_label: str = "OK",
    ) -> None:
        """Initialize the prompt.

        Args:
            title: Heading shown above the input.
            initial: Text the input starts with.
            placeholder: Hint shown while the input is empty.
            confirm_label: Label of the confirm button.
        """
        super().__init__()
        self.title_text = title
        self.initial = initial
        self.placeholder = placeholder
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Container(id="text-prompt-container"):
            yield Label(self.title_text, id="text-prompt-title")
            yield Input(value=self.initial, placeholder=self.placeholder, id="text-prompt-input")
            with Horizontal(id="text-prompt-buttons"):
                yield Button("Cancel", id="text-prompt-cancel", variant="default")
                yield Button(self.confirm_label, id="text-prompt-confirm", variant="success")

    def on_mount(self) -> None:
        self.query_one("#text-prompt-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "text-prompt-confirm":
            self._submit()
        elif event.button.id == "text-prompt-cancel":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _submit(self) -> None:
        value = self.query_one("#text-prompt-input", Input).value.strip()
        if not value:
            logger.debug(f"Ignoring empty input in '{self.title_text}' prompt")
            return
        self.dismiss(value)
