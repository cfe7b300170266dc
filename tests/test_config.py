from __future__ import annotations

import logging

import pytest

from billing import config
from billing.logging_config import configure_logging


def test_defaults(monkeypatch):
    for name in ("BILLING_STORAGE_PATH", "BILLING_LOG_PATH", "BILLING_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    assert config.resolve_storage_path() == config.STORAGE_PATH
    assert config.resolve_log_path() == config.LOG_PATH
    assert config.resolve_log_level() == logging.INFO


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("BILLING_STORAGE_PATH", str(tmp_path / "shop.db"))
    monkeypatch.setenv("BILLING_LOG_PATH", str(tmp_path / "shop.log"))
    monkeypatch.setenv("BILLING_LOG_LEVEL", "debug")

    assert config.resolve_storage_path() == str(tmp_path / "shop.db")
    assert config.resolve_log_path() == str(tmp_path / "shop.log")
    assert config.resolve_log_level() == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("BILLING_LOG_LEVEL", "chatty")
    assert config.resolve_log_level() == logging.INFO


@pytest.fixture
def billing_logger():
    logger = logging.getLogger("billing")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:], logger.level, logger.propagate = saved


def test_configure_logging_writes_module_records_to_file(tmp_path, billing_logger):
    log_path = tmp_path / "logs" / "billing.log"
    configure_logging(log_path, logging.DEBUG)
    configure_logging(log_path, logging.DEBUG)

    file_handlers = [h for h in billing_logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logging.getLogger("billing.cart").debug("cart increment product_id=%r", "1")
    for handler in file_handlers:
        handler.flush()

    content = log_path.read_text(encoding="utf-8")
    assert "[billing.cart] DEBUG: cart increment product_id='1'" in content
