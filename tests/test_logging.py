import logging

import pytest

from legalconsult.core.logging import setup_logging
from legalconsult.core.settings import get_settings


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_applies_configured_level(monkeypatch, restore_root_logger):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    get_settings.cache_clear()
    try:
        setup_logging()
    finally:
        get_settings.cache_clear()

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("uvicorn.access").propagate is False


def test_setup_logging_keeps_existing_module_loggers(restore_root_logger):
    module_logger = logging.getLogger("legalconsult.notification.dispatcher")
    get_settings.cache_clear()
    setup_logging()
    get_settings.cache_clear()

    assert module_logger.disabled is False
