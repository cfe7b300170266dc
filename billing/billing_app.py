"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Header, Static

from billing.bills import BillLogCorruptedError, BillStore
from billing.bills_screen import BillsScreen
from billing.cart import CartManager
from billing.models import Bill, Product
from billing.payment_modal import PaymentModal
from billing.rendering import format_amount, format_cart_line, format_product_row
from billing.storage import StorageError

logger = logging.getLogger(__name__)


class BillingApp(App):
    """A Textual app for building a cart and recording paid bills."""

    TITLE = "Billing App"
    SUB_TITLE = "Products / Cart"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #products-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #products-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #total-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)

    BINDINGS = [
        ("j", "move_selection(1)", "Next product"),
        ("k", "move_selection(-1)", "Previous product"),
        ("down", "move_selection(1)", "Next product"),
        ("up", "move_selection(-1)", "Previous product"),
        ("a", "increment_selected", "Add"),
        ("plus", "increment_selected", "Add"),
        ("enter", "increment_selected", "Add"),
        ("d", "decrement_selected", "Remove one"),
        ("minus", "decrement_selected", "Remove one"),
        ("c", "checkout", "Checkout"),
        ("b", "view_bills", "View bills"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, products: list[Product], cart: CartManager, bill_store: BillStore) -> None:
        super().__init__()
        self.products = products
        self.cart = cart
        self.bill_store = bill_store
        self.system_status = ""
        self.last_bill: Bill | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="products-pane"):
                yield Static("Product List", classes="pane-title")
                yield Static(id="products-list")
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("No items in cart.", id="cart-list")
        yield Static(id="total-bar")

    def on_mount(self) -> None:
        logger.debug("app mounted products=%d", len(self.products))
        self._refresh_all()

    def _billing_screen_active(self) -> bool:
        return len(self.screen_stack) <= 1

    def action_move_selection(self, delta: int) -> None:
        if not self._billing_screen_active() or not self.products:
            return
        self.selected_index = (self.selected_index + delta) % len(self.products)
        self._refresh_products()

    def action_increment_selected(self) -> None:
        product = self._selected_product()
        if product is None:
            return
        self.cart.increment(product)
        self.system_status = ""
        self._refresh_all()

    def action_decrement_selected(self) -> None:
        product = self._selected_product()
        if product is None:
            return
        self.cart.decrement(product.id)
        self.system_status = ""
        self._refresh_all()

    def action_checkout(self) -> None:
        if not self._billing_screen_active():
            return
        if self.cart.is_empty:
            self.system_status = "Cart is empty, nothing to check out"
            self._refresh_total()
            return
        logger.debug("checkout requested items=%d total=%s", self.cart.item_count, self.cart.compute_total())
        self.push_screen(PaymentModal(self.cart.compute_total()), self._on_payment_chosen)

    def action_view_bills(self) -> None:
        if not self._billing_screen_active():
            return
        self.push_screen(BillsScreen(self.bill_store))

    def _on_payment_chosen(self, payment_method: str | None) -> None:
        if payment_method is None:
            self.system_status = "Checkout cancelled"
            self._refresh_total()
            return

        try:
            bill = self.cart.checkout(payment_method, self.bill_store)
        except (StorageError, BillLogCorruptedError) as exc:
            logger.exception("checkout failed payment=%s", payment_method)
            self.system_status = f"Checkout failed: {exc}"
            self._refresh_all()
            return

        self.last_bill = bill
        self.system_status = f"Bill saved with {payment_method} payment"
        self._refresh_all()

    def _selected_product(self) -> Product | None:
        if not self._billing_screen_active():
            return None
        if not (0 <= self.selected_index < len(self.products)):
            return None
        return self.products[self.selected_index]

    def _refresh_all(self) -> None:
        self._refresh_products()
        self._refresh_cart()
        self._refresh_total()

    def _main_widget(self, selector: str) -> Static | None:
        try:
            return self.screen_stack[0].query_one(selector, Static)
        except (NoMatches, IndexError):
            return None

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        half = rows // 2
        start = max(0, selected - half)
        start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_products(self) -> None:
        products_widget = self._main_widget("#products-list")
        if products_widget is None:
            return
        if not self.products:
            products_widget.update("(no products)")
            return

        visible_rows = self._visible_rows(products_widget)
        start, end = self._window_bounds(len(self.products), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            product = self.products[idx]
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_product_row(product, self.cart.quantity_of(product.id)))

        if end < len(self.products):
            lines.append("\n⋮", style="dim")

        products_widget.update(lines)

    def _refresh_cart(self) -> None:
        cart_widget = self._main_widget("#cart-list")
        if cart_widget is None:
            return
        entries = list(self.cart.entries.values())
        if not entries:
            cart_widget.update("No items in cart.")
            return

        visible_rows = self._visible_rows(cart_widget)
        start, end = self._window_bounds(len(entries), visible_rows, len(entries) - 1)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append_text(format_cart_line(entries[idx]))

        if end < len(entries):
            lines.append("\n⋮", style="dim")

        cart_widget.update(lines)

    def _refresh_total(self) -> None:
        bar = self._main_widget("#total-bar")
        if bar is None:
            return
        text = Text()
        text.append(f"Total: {format_amount(self.cart.compute_total())}", style="bold")
        text.append("\nJ/K move. A add. D remove. C checkout. B bills. Ctrl+Q quit.")
        text.append(f"\n{self.system_status or 'Ready'}")
        bar.update(text)
