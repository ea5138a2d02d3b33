"""Process-wide agent configuration read once from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://postgrest-service.foodchain-db.svc.cluster.local:3000"
DEFAULT_JWT_SECRET = "super-secret-jwt-key-conform-plan-van-aanpak"
DEFAULT_TRUCK_VIN = "FC-TRUCK-2026-X99"
DEFAULT_LOG_LEVEL = "INFO"
ENDPOINT_PATH = "/currenttemperature"

_BASE_URL_ENV = "POSTGREST_BASE_URL"
_JWT_SECRET_ENV = "JWT_SECRET"
_TRUCK_VIN_ENV = "TRUCK_VIN"
_TRUCK_ID_ENV = "TRUCK_ID"
_SENSOR_COUNT_ENV = "SENSOR_COUNT"
_RETRY_MINUTES_ENV = "TRY_MINUTES_UNTIL_PANIC"
_SEND_INTERVAL_ENV = "SEND_INTERVAL_SECONDS"
_PROBE_INTERVAL_ENV = "PROBE_INTERVAL_SECONDS"
_VERIFY_TLS_ENV = "VERIFY_TLS"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_TABLE_NAME_ENV = "MOCK_STORE_TABLE_NAME"
_TABLE_PATH_ENV = "MOCK_STORE_PERSISTENCE_PATH"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    base_url: str
    jwt_secret: str
    truck_vin: str
    truck_id: int
    sensor_count: int
    startup_retry_minutes: int
    send_interval_seconds: float
    probe_interval_seconds: float
    verify_tls: bool
    log_level: str
    store_table_name: str
    store_persistence_path: Optional[str]

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url}{ENDPOINT_PATH}"

    @property
    def aggregate_sensor_id(self) -> str:
        return f"AGGR-{self.truck_vin}"


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_int_env(name: str, default: int, positive: bool = False) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %d", name, value, default)
        return default
    if positive and parsed <= 0:
        logger.warning("%s must be positive, using default %d", name, default)
        return default
    return parsed


def _read_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive, using default %s", name, default)
        return default
    return parsed


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    logger.warning("Invalid %s=%r, using default %s", name, value, default)
    return default


def normalize_log_level(value: Optional[str], default: str = DEFAULT_LOG_LEVEL) -> str:
    """Upper-case a level name, falling back to ``default`` if logging does not know it."""
    if value is None:
        return default
    candidate = value.strip().upper()
    if not candidate:
        return default
    if candidate not in logging.getLevelNamesMapping():
        logger.warning("Unknown log level %r, using %s", value, default)
        return default
    return candidate


def _read_log_level(default: str) -> str:
    return normalize_log_level(os.getenv(_LOG_LEVEL_ENV), default)


@lru_cache
def get_settings() -> Settings:
    return Settings(
        base_url=_read_str_env(_BASE_URL_ENV, DEFAULT_BASE_URL).rstrip("/"),
        jwt_secret=_read_str_env(_JWT_SECRET_ENV, DEFAULT_JWT_SECRET),
        truck_vin=_read_str_env(_TRUCK_VIN_ENV, DEFAULT_TRUCK_VIN),
        truck_id=_read_int_env(_TRUCK_ID_ENV, 42),
        sensor_count=_read_int_env(_SENSOR_COUNT_ENV, 30, positive=True),
        startup_retry_minutes=_read_int_env(_RETRY_MINUTES_ENV, 10, positive=True),
        send_interval_seconds=_read_float_env(_SEND_INTERVAL_ENV, 60.0),
        probe_interval_seconds=_read_float_env(_PROBE_INTERVAL_ENV, 60.0),
        verify_tls=_read_bool_env(_VERIFY_TLS_ENV, True),
        log_level=_read_log_level(DEFAULT_LOG_LEVEL),
        store_table_name=_read_str_env(_TABLE_NAME_ENV, "currenttemperature"),
        store_persistence_path=_read_optional_env(_TABLE_PATH_ENV, None),
    )
