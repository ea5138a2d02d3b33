from __future__ import annotations

import logging
from typing import Iterator

import pytest

from datastore.mock_table import build_default_table
from settings import DEFAULT_BASE_URL, get_settings

_ENV_NAMES = (
    "POSTGREST_BASE_URL",
    "JWT_SECRET",
    "TRUCK_VIN",
    "TRUCK_ID",
    "SENSOR_COUNT",
    "TRY_MINUTES_UNTIL_PANIC",
    "SEND_INTERVAL_SECONDS",
    "VERIFY_TLS",
    "LOG_LEVEL",
    "MOCK_STORE_TABLE_NAME",
    "MOCK_STORE_PERSISTENCE_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> Iterator[None]:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    build_default_table.cache_clear()
    yield
    get_settings.cache_clear()
    build_default_table.cache_clear()


def test_defaults_apply_without_environment() -> None:
    settings = get_settings()

    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.endpoint_url == f"{DEFAULT_BASE_URL}/currenttemperature"
    assert settings.truck_vin == "FC-TRUCK-2026-X99"
    assert settings.aggregate_sensor_id == "AGGR-FC-TRUCK-2026-X99"
    assert settings.truck_id == 42
    assert settings.sensor_count == 30
    assert settings.startup_retry_minutes == 10
    assert settings.send_interval_seconds == 60.0
    assert settings.verify_tls is True


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    table_path = tmp_path / "rows.json"
    monkeypatch.setenv("POSTGREST_BASE_URL", "https://store.example:3000/")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("TRUCK_VIN", "VIN-9")
    monkeypatch.setenv("TRUCK_ID", "9")
    monkeypatch.setenv("SENSOR_COUNT", "12")
    monkeypatch.setenv("TRY_MINUTES_UNTIL_PANIC", "3")
    monkeypatch.setenv("VERIFY_TLS", "false")
    monkeypatch.setenv("MOCK_STORE_TABLE_NAME", "custom-table")
    monkeypatch.setenv("MOCK_STORE_PERSISTENCE_PATH", str(table_path))

    settings = get_settings()
    table = build_default_table()

    assert settings.base_url == "https://store.example:3000"
    assert settings.endpoint_url == "https://store.example:3000/currenttemperature"
    assert settings.jwt_secret == "s3cret"
    assert settings.truck_id == 9
    assert settings.sensor_count == 12
    assert settings.startup_retry_minutes == 3
    assert settings.verify_tls is False
    assert table.name == "custom-table"
    assert table.persistence_path == table_path


@pytest.mark.parametrize(
    ("name", "value", "attribute", "default"),
    [
        ("TRUCK_ID", "forty-two", "truck_id", 42),
        ("SENSOR_COUNT", "abc", "sensor_count", 30),
        ("SENSOR_COUNT", "0", "sensor_count", 30),
        ("TRY_MINUTES_UNTIL_PANIC", "-1", "startup_retry_minutes", 10),
        ("SEND_INTERVAL_SECONDS", "soon", "send_interval_seconds", 60.0),
        ("VERIFY_TLS", "maybe", "verify_tls", True),
    ],
)
def test_invalid_values_fall_back_with_warning(monkeypatch, caplog, name, value, attribute, default) -> None:
    monkeypatch.setenv(name, value)

    with caplog.at_level(logging.WARNING, logger="settings"):
        settings = get_settings()

    assert getattr(settings, attribute) == default
    assert any(name in record.getMessage() for record in caplog.records)


def test_unknown_log_level_falls_back_to_info(monkeypatch, caplog) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with caplog.at_level(logging.WARNING, logger="settings"):
        settings = get_settings()

    assert settings.log_level == "INFO"
    assert any("verbose" in record.getMessage() for record in caplog.records)


def test_known_log_level_is_upper_cased(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    assert get_settings().log_level == "DEBUG"
