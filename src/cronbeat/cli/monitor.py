from __future__ import annotations

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

import click

from cronbeat.config.config import HeartbeatConfig
from cronbeat.db.connector import JobDbConnector
from cronbeat.db.sql_store import SqlJobStore
from cronbeat.heartbeat.models import JobStatus
from cronbeat.heartbeat.monitor import CrashMonitor
from cronbeat.heartbeat.staleness import is_stale
from cronbeat.monitoring.metrics import CONTENT_TYPE_LATEST, generate_latest
from cronbeat.utils.logging import configure_logging, get_logger
from cronbeat.utils.signals import setup_signal_handlers


def _build_handler(monitor: CrashMonitor, start_time: float):
    """Create HTTP handler exposing health and Prometheus metrics."""

    class MonitorHandler(BaseHTTPRequestHandler):
        def _write_json(self, payload: dict, status: int = 200) -> None:
            body = json.dumps(payload).encode()
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(body)

        def do_GET(self):  # noqa: N802
            if self.path in ("/health", "/health/live"):
                uptime = int(time.time() - start_time)
                self._write_json({"status": "ok", "uptime_seconds": uptime})
                return

            if self.path == "/health/ready":
                status = "stopping" if monitor.stopping else "ok"
                code = 200 if status == "ok" else 503
                self._write_json({"status": status}, status=code)
                return

            if self.path == "/metrics":
                output = generate_latest()
                self.send_response(200)
                self.send_header("Content-Type", CONTENT_TYPE_LATEST)
                self.send_header("Content-Length", str(len(output)))
                self.end_headers()
                self.wfile.write(output)
                return

            self.send_response(404)
            self.end_headers()

        def log_message(self, _format: str, *_args):  # noqa: D401, ANN001
            """Silence default HTTP request logging."""
            return

    return MonitorHandler


def _start_http_server(monitor: CrashMonitor, port: int) -> ThreadingHTTPServer:
    handler = _build_handler(monitor, time.time())
    server = ThreadingHTTPServer(("", port), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


def _open_store(config: HeartbeatConfig) -> SqlJobStore:
    return SqlJobStore.from_connector(JobDbConnector(config.db_url))


def _build_monitor(config: HeartbeatConfig, store: SqlJobStore) -> CrashMonitor:
    return CrashMonitor(
        store,
        clock=config.build_clock(),
        crash_threshold_minutes=config.crash_threshold_minutes,
    )


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML config file (environment variables take precedence).",
)
@click.option("--log-level", default="INFO", show_default=True)
@click.option("--json-logs/--console-logs", default=False, show_default=True)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: str, json_logs: bool) -> None:
    """Inspect job heartbeats and mark crashed jobs."""
    configure_logging(level=log_level, json_output=json_logs)
    if config_path:
        ctx.obj = HeartbeatConfig.from_yaml(config_path)
    else:
        ctx.obj = HeartbeatConfig.from_env()


@cli.command("init-db")
@click.pass_obj
def init_db(config: HeartbeatConfig) -> None:
    """Create the cron job table."""
    connector = JobDbConnector(config.db_url)
    connector.init_models()
    connector.dispose()
    click.echo("initialized")


@cli.command()
@click.pass_obj
def status(config: HeartbeatConfig) -> None:
    """List jobs with their status and heartbeat."""
    store = _open_store(config)
    now = config.build_clock().now()
    try:
        for record in store.list_records():
            stale = is_stale(record.heartbeat, now, config.crash_threshold_minutes)
            heartbeat = record.heartbeat.isoformat() if record.heartbeat else "-"
            flag = " STALE" if stale and record.status != JobStatus.IDLE else ""
            click.echo(f"{record.name}\t{record.status.value}\t{heartbeat}{flag}")
    finally:
        store.close()


@cli.command()
@click.pass_obj
def check(config: HeartbeatConfig) -> None:
    """Run a single crash sweep."""
    store = _open_store(config)
    try:
        marked = _build_monitor(config, store).sweep()
    finally:
        store.close()
    for name in marked:
        click.echo(f"crashed\t{name}")


@cli.command()
@click.pass_obj
def run(config: HeartbeatConfig) -> None:
    """Sweep periodically and serve /health and /metrics."""
    logger = get_logger(__name__)
    store = _open_store(config)
    monitor = _build_monitor(config, store)

    http_server = _start_http_server(monitor, config.metrics_port)
    setup_signal_handlers(monitor)

    logger.info(
        "starting_monitor",
        interval_seconds=config.monitor_interval_seconds,
        crash_threshold_minutes=config.crash_threshold_minutes,
        metrics_port=config.metrics_port,
    )

    try:
        monitor.run_forever(interval_seconds=config.monitor_interval_seconds)
    finally:
        http_server.shutdown()
        store.close()


def main() -> None:
    """Entry point for the cronbeat CLI."""
    cli()


if __name__ == "__main__":
    main()
