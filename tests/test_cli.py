"""Tests for the cronbeat CLI."""

from datetime import datetime, timedelta, timezone

import pytest
from click.testing import CliRunner

from cronbeat.cli.monitor import cli
from cronbeat.db.sql_store import SqlJobStore
from cronbeat.heartbeat.models import JobStatus

pytestmark = pytest.mark.integration


@pytest.fixture
def runner(db_url, monkeypatch) -> CliRunner:
    monkeypatch.setenv("CRONBEAT_DB_URL", db_url)
    monkeypatch.delenv("CRONBEAT_CRASH_THRESHOLD_MINUTES", raising=False)
    return CliRunner()


def _seed(connector):
    store = SqlJobStore.from_connector(connector)
    now = datetime.now(timezone.utc)
    try:
        for name, status, age in (
            ("stuck", JobStatus.RUNNING, timedelta(minutes=40)),
            ("busy", JobStatus.RUNNING, timedelta(seconds=5)),
            ("done", JobStatus.IDLE, timedelta(days=2)),
        ):
            record = store.create(name)
            record.status = status
            record.heartbeat = now - age
            store.save(record)
    finally:
        store.close()


def test_init_db(runner, db_url):
    result = runner.invoke(cli, ["--log-level", "ERROR", "init-db"])
    assert result.exit_code == 0, result.output
    assert "initialized" in result.stdout


def test_status_lists_jobs(runner, connector):
    _seed(connector)

    result = runner.invoke(cli, ["--log-level", "ERROR", "status"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert [line.split("\t")[0] for line in lines] == ["busy", "done", "stuck"]
    assert lines[2].endswith("STALE")
    assert not lines[0].endswith("STALE")
    assert not lines[1].endswith("STALE")


def test_check_marks_stale_jobs(runner, connector):
    _seed(connector)

    result = runner.invoke(cli, ["--log-level", "ERROR", "check"])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "crashed\tstuck"

    store = SqlJobStore.from_connector(connector)
    try:
        assert store.find_by_name("stuck").status == JobStatus.CRASHED
        assert store.find_by_name("busy").status == JobStatus.RUNNING
    finally:
        store.close()


def test_config_file_option(runner, connector, tmp_path, monkeypatch):
    _seed(connector)
    path = tmp_path / "cronbeat.yaml"
    path.write_text("crash_threshold_minutes: 60\n", encoding="utf-8")

    result = runner.invoke(cli, ["--config", str(path), "--log-level", "ERROR", "check"])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == ""
