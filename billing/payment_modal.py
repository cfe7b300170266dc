"""Payment method selection modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from billing.models import PAYMENT_CASH, PAYMENT_PHONEPE
from billing.rendering import format_amount, payment_badge_style

_KEY_TO_METHOD = {
    "p": PAYMENT_PHONEPE,
    "c": PAYMENT_CASH,
}


class PaymentModal(ModalScreen[str | None]):
    """Ask how the customer paid before the bill is saved."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-options {
        color: white;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(self, total: int | float) -> None:
        super().__init__()
        self.total = total

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Choose Payment Method", id="payment-title")
            yield Static(id="payment-options")
            yield Static("P PhonePe. C Cash. Esc/q cancel.", id="payment-help")

    def on_mount(self) -> None:
        options = Text()
        options.append(f"Total: {format_amount(self.total)}\n\n", style="bold")
        for key, method in _KEY_TO_METHOD.items():
            options.append(f"[{key.upper()}] ")
            options.append(f" {method} ", style=payment_badge_style(method))
            options.append("\n")
        options.append("[Esc] Cancel", style="#ffb3b3")
        self.query_one("#payment-options", Static).update(options)

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        method = _KEY_TO_METHOD.get(event.key)
        if method is not None:
            self.dismiss(method)
            event.stop()
