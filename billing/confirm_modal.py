"""Yes/no confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ConfirmModal(ModalScreen[bool]):
    """Confirm a destructive action. Dismisses with True only on ``y``."""

    CSS = """
    ConfirmModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 56;
        height: auto;
        border: round #b23a48;
        background: $panel;
        padding: 1 2;
    }

    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirm-message {
        color: white;
        margin-bottom: 1;
    }

    #confirm-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static(self.title_text, id="confirm-title")
            yield Static(self.message, id="confirm-message")
            yield Static("Y confirm. N/Esc/q cancel.", id="confirm-help")

    def on_key(self, event: Key) -> None:
        if event.key == "y":
            self.dismiss(True)
            event.stop()
            return

        if event.key in {"n", "escape", "q", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
