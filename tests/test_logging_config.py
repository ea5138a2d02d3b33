from __future__ import annotations

import logging
from typing import Iterator

import pytest

import logging_config
from logging_config import ContextualFormatter, configure_logging
from settings import get_settings


@pytest.fixture()
def fresh_root(monkeypatch) -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    monkeypatch.setattr(logging_config, "_configured", False)
    get_settings.cache_clear()
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)
        get_settings.cache_clear()


def test_unknown_level_from_environment_is_not_fatal(monkeypatch, fresh_root) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    configure_logging()

    assert fresh_root.level == logging.INFO


def test_unknown_explicit_level_is_not_fatal(fresh_root) -> None:
    configure_logging("loud")

    assert fresh_root.level == logging.INFO


def test_explicit_level_is_applied(fresh_root) -> None:
    configure_logging("debug")

    assert fresh_root.level == logging.DEBUG


def test_formatter_appends_known_extras() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["truck_id", "url"])
    record = logging.LogRecord("agent", logging.INFO, __file__, 1, "sent", None, None)
    record.truck_id = 42
    record.url = None

    assert formatter.format(record) == "sent | truck_id=42"
