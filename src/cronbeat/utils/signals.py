"""Signal helpers for graceful shutdown."""

from __future__ import annotations

import signal
from typing import TYPE_CHECKING, Any

from cronbeat.utils.logging import get_logger

if TYPE_CHECKING:
    from cronbeat.heartbeat.monitor import CrashMonitor

logger = get_logger(__name__)


def setup_signal_handlers(monitor: "CrashMonitor") -> None:
    """Stop the monitor loop on SIGINT/SIGTERM."""

    def handler(signum: int, _frame: Any) -> None:
        logger.info("received_signal", signal=signum)
        monitor.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, handler)
