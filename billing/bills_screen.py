"""Bill history screen grouped by day."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Header, Static

from billing.bills import BillLogCorruptedError, BillStore
from billing.confirm_modal import ConfirmModal
from billing.models import Bill
from billing.rendering import format_bill_card
from billing.storage import StorageError

logger = logging.getLogger(__name__)


class BillsScreen(Screen[None]):
    """Read-only view of saved bills with a clear-history action."""

    BINDINGS = [
        ("escape", "back", "Back"),
        ("b", "back", "Back"),
        ("x", "clear_history", "Clear history"),
        ("r", "reload", "Reload"),
    ]

    CSS = """
    #bills-status {
        border: heavy $secondary;
        padding: 0 1;
        height: 3;
    }

    #bills-scroll {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, bill_store: BillStore) -> None:
        super().__init__()
        self.bill_store = bill_store
        self.grouped: dict[str, list[Bill]] = {}
        self.load_error: str | None = None
        self.status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="bills-status")
        with VerticalScroll(id="bills-scroll"):
            yield Static("Daily Bills", classes="pane-title")
            yield Static(id="bills-body")

    def on_mount(self) -> None:
        self.reload()

    def on_screen_resume(self) -> None:
        self.reload()

    def reload(self) -> None:
        # Rebuilt from storage every time; the grouping is never cached.
        try:
            self.grouped = self.bill_store.load_grouped()
            self.load_error = None
        except (BillLogCorruptedError, StorageError) as exc:
            logger.exception("bill history load failed")
            self.grouped = {}
            self.load_error = str(exc)
        self._refresh()

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_reload(self) -> None:
        self.reload()

    def action_clear_history(self) -> None:
        self.app.push_screen(
            ConfirmModal("Confirm", "Are you sure you want to clear all bill history?"),
            self._on_clear_confirmed,
        )

    def _on_clear_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            self.status = "Clear cancelled"
            self._refresh()
            return

        try:
            self.bill_store.clear()
        except StorageError as exc:
            logger.exception("bill history clear failed")
            self.status = f"Could not clear bill history: {exc}"
            self._refresh()
            return

        self.status = "All bill history cleared."
        self.reload()

    def _refresh(self) -> None:
        try:
            status_widget = self.query_one("#bills-status", Static)
            body = self.query_one("#bills-body", Static)
        except NoMatches:
            return

        status_widget.update(f"X clear history. B/Esc back. R reload.\n{self.status or 'Ready'}")

        if self.load_error is not None:
            body.update(Text(f"Bill history is unreadable: {self.load_error}", style="bold #ffb3b3"))
            return

        if not self.grouped:
            body.update("No bills yet.")
            return

        content = Text()
        for day_idx, (day, bills) in enumerate(self.grouped.items()):
            if day_idx > 0:
                content.append("\n\n")
            content.append(day, style="bold underline")
            for bill in bills:
                content.append("\n\n")
                content.append_text(format_bill_card(bill))
        body.update(content)
