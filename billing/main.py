"""Entry point for the billing Textual app."""

from __future__ import annotations

import locale
import logging

from billing.bills import BillStore
from billing.billing_app import BillingApp
from billing.cart import CartManager
from billing.config import BILLS_STORAGE_KEY, resolve_log_level, resolve_log_path, resolve_storage_path
from billing.data import PRODUCTS
from billing.logging_config import configure_logging
from billing.storage import SQLiteKeyValueStore

logger = logging.getLogger(__name__)


def build_app(storage_path: str | None = None) -> BillingApp:
    """Wire a fresh cart and the on-disk bill store into the app."""
    storage = SQLiteKeyValueStore(storage_path or resolve_storage_path())
    return BillingApp(
        products=PRODUCTS,
        cart=CartManager(),
        bill_store=BillStore(storage, key=BILLS_STORAGE_KEY),
    )


def main() -> None:
    """Run the Textual application."""
    configure_logging(resolve_log_path(), resolve_log_level())
    try:
        # Day headings in the bills view follow the user locale.
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        logger.warning("locale unavailable, using C date format: %s", exc)
    storage_path = resolve_storage_path()
    logger.info("starting billing app storage=%s", storage_path)
    build_app(storage_path).run()


if __name__ == "__main__":
    main()
