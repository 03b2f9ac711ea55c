"""Tests for configuration loading."""

from datetime import timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from cronbeat.config.config import ENV_VARS, HeartbeatConfig
from cronbeat.db.memory_store import InMemoryJobStore
from cronbeat.heartbeat.tracker import HeartbeatTracker


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


@pytest.mark.unit
def test_defaults():
    config = HeartbeatConfig()
    assert config.heartbeat_interval_seconds == 10
    assert config.crash_threshold_minutes == 15
    assert config.timezone == "UTC"
    assert config.build_clock().tz is timezone.utc


@pytest.mark.unit
def test_from_env(monkeypatch):
    monkeypatch.setenv("CRONBEAT_DB_URL", "postgresql+psycopg2://cron:cron@db/cron")
    monkeypatch.setenv("CRONBEAT_HEARTBEAT_INTERVAL_SECONDS", "30")
    monkeypatch.setenv("CRONBEAT_CRASH_THRESHOLD_MINUTES", "5")
    monkeypatch.setenv("CRONBEAT_TIMEZONE", "Europe/Brussels")

    config = HeartbeatConfig.from_env()

    assert config.db_url == "postgresql+psycopg2://cron:cron@db/cron"
    assert config.heartbeat_interval_seconds == 30
    assert config.crash_threshold_minutes == 5
    assert config.build_clock().tz == ZoneInfo("Europe/Brussels")


@pytest.mark.unit
def test_from_yaml_with_env_override(tmp_path, monkeypatch):
    path = tmp_path / "cronbeat.yaml"
    path.write_text(
        "db_url: sqlite:///jobs.db\n"
        "heartbeat_interval_seconds: 20\n"
        "crash_threshold_minutes: 30\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CRONBEAT_CRASH_THRESHOLD_MINUTES", "45")

    config = HeartbeatConfig.from_yaml(path)

    assert config.db_url == "sqlite:///jobs.db"
    assert config.heartbeat_interval_seconds == 20
    assert config.crash_threshold_minutes == 45


@pytest.mark.unit
def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        HeartbeatConfig.from_yaml(path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"timezone": "Mars/Olympus_Mons"},
        {"heartbeat_interval_seconds": -1},
        {"crash_threshold_minutes": -5},
        {"monitor_interval_seconds": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        HeartbeatConfig(**overrides)


@pytest.mark.unit
def test_tracker_from_config():
    config = HeartbeatConfig(heartbeat_interval_seconds=3, crash_threshold_minutes=2)
    tracker = HeartbeatTracker.from_config(InMemoryJobStore(), config)
    assert tracker.heartbeat_interval_seconds == 3
    assert tracker.crash_threshold_minutes == 2
