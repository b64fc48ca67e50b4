from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_INTERVAL_ENV = "SAMPLING_INTERVAL_SECONDS"
_ALERT_CAPACITY_ENV = "ALERT_REGISTRY_CAPACITY"
_ALERT_TTL_ENV = "ALERT_TTL_SECONDS"
_STATS_HISTORY_ENV = "STATS_HISTORY_SIZE"
_SENSOR_SOURCE_ENV = "SENSOR_SOURCE"
_GATEWAY_URL_ENV = "SENSOR_GATEWAY_URL"
_FAILURE_RATE_ENV = "SENSOR_FAILURE_RATE"
_CSV_PATH_ENV = "METRICS_CSV_PATH"
_JSON_PATH_ENV = "STATUS_JSON_PATH"
_JSON_EVERY_ENV = "JSON_EXPORT_EVERY"
_MAINTENANCE_EVERY_ENV = "MAINTENANCE_CHECK_EVERY"
_ZONE_ID_ENV = "ZONE_ID"
_ZONE_NAME_ENV = "ZONE_NAME"
_ZONE_TYPE_ENV = "ZONE_TYPE"
_ZONE_TARGET_TEMP_ENV = "ZONE_TARGET_TEMPERATURE"
_ZONE_TARGET_HUMIDITY_ENV = "ZONE_TARGET_HUMIDITY"
_AUTOSTART_ENV = "MONITOR_AUTOSTART"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_SENSOR_SOURCES = {"simulated", "http"}


@dataclass(frozen=True)
class Settings:
    sampling_interval: float
    alert_capacity: int
    alert_ttl_seconds: float
    stats_history_size: int
    sensor_source: str
    sensor_gateway_url: str
    sensor_failure_rate: float
    metrics_csv_path: Optional[str]
    status_json_path: Optional[str]
    json_export_every: int
    maintenance_check_every: int
    zone_id: str
    zone_name: str
    zone_type: str
    zone_target_temperature: float
    zone_target_humidity: float
    monitor_autostart: bool
    log_level: str


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


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_float(name: str, default: float, minimum: float = 0.0) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in {"1", "true", "yes", "on"}:
        return True
    if candidate in {"0", "false", "no", "off"}:
        return False
    return default


def _read_sensor_source(default: str) -> str:
    candidate = _read_str_env(_SENSOR_SOURCE_ENV, default).lower()
    return candidate if candidate in _SENSOR_SOURCES else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        sampling_interval=_read_float(_INTERVAL_ENV, 3.0, minimum=0.01),
        alert_capacity=_read_positive_int(_ALERT_CAPACITY_ENV, 100),
        alert_ttl_seconds=_read_float(_ALERT_TTL_ENV, 0.0),
        stats_history_size=_read_positive_int(_STATS_HISTORY_ENV, 500),
        sensor_source=_read_sensor_source("simulated"),
        sensor_gateway_url=_read_str_env(_GATEWAY_URL_ENV, "http://localhost:8080"),
        sensor_failure_rate=min(_read_float(_FAILURE_RATE_ENV, 0.05), 1.0),
        metrics_csv_path=_read_optional_env(_CSV_PATH_ENV, "./tmp/building_metrics.csv"),
        status_json_path=_read_optional_env(_JSON_PATH_ENV, "./tmp/building_status.json"),
        json_export_every=_read_positive_int(_JSON_EVERY_ENV, 5),
        maintenance_check_every=_read_positive_int(_MAINTENANCE_EVERY_ENV, 100),
        zone_id=_read_str_env(_ZONE_ID_ENV, "Zone-A"),
        zone_name=_read_str_env(_ZONE_NAME_ENV, "Main Office Area"),
        zone_type=_read_str_env(_ZONE_TYPE_ENV, "Office"),
        zone_target_temperature=_read_float(_ZONE_TARGET_TEMP_ENV, 22.0, minimum=-50.0),
        zone_target_humidity=_read_float(_ZONE_TARGET_HUMIDITY_ENV, 45.0),
        monitor_autostart=_read_bool(_AUTOSTART_ENV, True),
        log_level=_read_log_level("INFO"),
    )
