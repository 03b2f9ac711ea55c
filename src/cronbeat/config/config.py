"""Configuration management."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

from cronbeat.heartbeat.models import (
    DEFAULT_CRASH_THRESHOLD_MINUTES,
    DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
)
from cronbeat.utils.clock import Clock

# Environment variable for each config field.
ENV_VARS: Dict[str, str] = {
    "db_url": "CRONBEAT_DB_URL",
    "heartbeat_interval_seconds": "CRONBEAT_HEARTBEAT_INTERVAL_SECONDS",
    "crash_threshold_minutes": "CRONBEAT_CRASH_THRESHOLD_MINUTES",
    "timezone": "CRONBEAT_TIMEZONE",
    "monitor_interval_seconds": "CRONBEAT_MONITOR_INTERVAL_SECONDS",
    "metrics_port": "CRONBEAT_METRICS_PORT",
}


class HeartbeatConfig(BaseModel):
    """Settings shared by job trackers and the crash monitor."""

    db_url: str = Field("sqlite:///cronbeat.db", description="SQLAlchemy database URL")
    heartbeat_interval_seconds: float = Field(
        DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
        ge=0,
        description="Minimum seconds between persisted heartbeats",
    )
    crash_threshold_minutes: float = Field(
        DEFAULT_CRASH_THRESHOLD_MINUTES,
        ge=0,
        description="Heartbeat age (minutes) after which a job is assumed crashed",
    )
    timezone: str = Field("UTC", description="IANA timezone for written timestamps")
    monitor_interval_seconds: float = Field(
        60, gt=0, description="Seconds between crash monitor sweeps"
    )
    metrics_port: int = Field(9102, ge=0, le=65535, description="Monitor HTTP port")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject names zoneinfo cannot resolve."""
        if v.upper() == "UTC":
            return "UTC"
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @classmethod
    def from_env(cls) -> "HeartbeatConfig":
        values: Dict[str, Any] = {}
        for field_name, env_var in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is not None and raw != "":
                values[field_name] = raw
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "HeartbeatConfig":
        """
        Load config from a YAML mapping; environment variables override file values.

        Example:
            db_url: postgresql+psycopg2://cron:cron@db/cron
            heartbeat_interval_seconds: 10
            crash_threshold_minutes: 15
            timezone: Europe/Brussels
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        for field_name, env_var in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is not None and raw != "":
                data[field_name] = raw
        return cls(**data)

    def build_clock(self) -> Clock:
        return Clock.for_zone(self.timezone)


__all__ = ["HeartbeatConfig", "ENV_VARS"]
