from __future__ import annotations

import logging
import signal
import sys
from typing import Any, TYPE_CHECKING

from config import ENABLE_METRICS, METRICS_ADDR, METRICS_PORT
from core import (
    CancellationToken,
    PingOptions,
    PingWorker,
    RoundBarrier,
    RoundScheduler,
    TargetWorkState,
)
from infrastructure import start_metrics_server
from services import SystemPingExecutor
from ui import ConsoleMessages, RoundReporter

if TYPE_CHECKING:
    from cli import RunOptions
    from core import PingExecutor, RoundSink


class MultiPingApp:
    """Wires targets, workers and the scheduler together for one run."""

    def __init__(
        self,
        options: RunOptions,
        *,
        executor: PingExecutor | None = None,
        reporter: RoundSink | None = None,
        messages: ConsoleMessages | None = None,
    ) -> None:
        self.options = options
        self.executor = executor or SystemPingExecutor()
        self.reporter = reporter or RoundReporter()
        self.messages = messages or ConsoleMessages()
        self.cancel_token = CancellationToken()
        self.barrier = RoundBarrier()

        ping_options = PingOptions(ttl=options.ttl, dont_fragment=options.dont_fragment)
        self.states = [
            TargetWorkState(
                address=address,
                options=ping_options,
                payload_size=options.payload_size,
                timeout_ms=options.timeout_ms,
            )
            for address in options.targets
        ]
        self.workers = [
            PingWorker(state, self.executor, self.barrier, self.cancel_token)
            for state in self.states
        ]
        self.scheduler = RoundScheduler(
            self.workers,
            self.barrier,
            self.cancel_token,
            self.reporter,
            options.rate_ms,
            on_stop=self._on_stop,
        )
        self.metrics_server = None
        self.interrupted_by: int | None = None

    def _install_signal_handlers(self) -> None:
        # Only flip flags here; the main thread may be mid-write to stdout
        def handler(sig: int, frame: Any) -> None:
            if self.cancel_token.is_cancelled:
                return
            self.interrupted_by = sig
            self.cancel_token.cancel()

        signal.signal(signal.SIGINT, handler)
        if hasattr(signal, "SIGTERM"):
            signal.signal(signal.SIGTERM, handler)
        if sys.platform == "win32" and hasattr(signal, "SIGBREAK"):
            signal.signal(signal.SIGBREAK, handler)  # type: ignore[attr-defined]

    def _on_stop(self) -> None:
        if self.interrupted_by is not None:
            logging.info(f"Received signal {self.interrupted_by}, finishing current round")
            self.messages.stopping()

    def run(self, install_signal_handlers: bool = True) -> int:
        """Run rounds until interrupted; returns the process exit code."""
        if install_signal_handlers:
            self._install_signal_handlers()

        if ENABLE_METRICS:
            self.metrics_server = start_metrics_server(addr=METRICS_ADDR, port=METRICS_PORT)

        logging.info(
            f"Probing {len(self.states)} targets: payload={self.options.payload_size}B "
            f"ttl={self.options.ttl} df={self.options.dont_fragment} "
            f"rate={self.options.rate_ms}ms timeout={self.options.timeout_ms}ms"
        )

        self.scheduler.start_workers()
        self.messages.banner()

        rounds = self.scheduler.run()
        self.messages.finished()

        logging.info(f"Finished after {rounds} rounds")
        return 0


__all__ = ["MultiPingApp"]
