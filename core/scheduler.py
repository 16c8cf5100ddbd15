"""
Round scheduler - drives all workers through synchronized probe rounds.

One iteration:
    raise_go -> wait for every live worker -> report -> raise_release -> sleep

Workers that went fatal are retired from the wait set; their columns keep
showing the last known value.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence, TYPE_CHECKING

from config import SHUTDOWN_TIMEOUT_SECONDS
from infrastructure import FATAL_WORKERS, LIVE_WORKERS, ROUNDS_TOTAL

if TYPE_CHECKING:
    from .ping_worker import PingWorker
    from .protocols import RoundSink
    from .round_barrier import RoundBarrier
    from .work_state import CancellationToken, TargetWorkState


class RoundScheduler:
    """Coordinator owning the barrier, the round cadence and shutdown."""

    def __init__(
        self,
        workers: Sequence[PingWorker],
        barrier: RoundBarrier,
        cancel_token: CancellationToken,
        reporter: RoundSink,
        rate_ms: int,
        *,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        on_stop: Callable[[], None] | None = None,
    ) -> None:
        self.workers = list(workers)
        self.barrier = barrier
        self.cancel_token = cancel_token
        self.reporter = reporter
        self.rate_ms = rate_ms
        self.shutdown_timeout = shutdown_timeout
        self.clock = clock
        self.on_stop = on_stop
        self.rounds_completed = 0

    @property
    def states(self) -> list[TargetWorkState]:
        """Work states in input target order."""
        return [worker.state for worker in self.workers]

    def live_workers(self) -> list[PingWorker]:
        return [worker for worker in self.workers if not worker.retired]

    def start_workers(self) -> None:
        for worker in self.workers:
            worker.start()
        LIVE_WORKERS.set(len(self.workers))
        logging.info(f"Started {len(self.workers)} workers: {', '.join(w.state.address for w in self.workers)}")

    def run_round(self) -> None:
        """Run one synchronized round and emit its report."""
        live = self.live_workers()
        round_no = self.barrier.raise_go()
        self.barrier.wait_all_complete(worker.state.completion for worker in live)

        now = self.clock()
        self.reporter.report(now, self.states)

        self.barrier.raise_release()
        self.rounds_completed += 1
        ROUNDS_TOTAL.inc()

        retired = [w for w in live if w.retired]
        if retired:
            for worker in retired:
                if worker.state.fatal:
                    logging.warning(f"Worker for {worker.state.address} retired in round {round_no}")
            LIVE_WORKERS.set(len(self.live_workers()))
            FATAL_WORKERS.set(sum(1 for w in self.workers if w.state.fatal))

    def run(self) -> int:
        """Run rounds until cancelled, then shut workers down; returns rounds completed."""
        while not self.cancel_token.is_cancelled:
            if not self.live_workers():
                logging.warning("No live workers left, stopping")
                self.cancel_token.cancel()
                break

            self.run_round()

            if self.cancel_token.wait(self.rate_ms / 1000.0):
                break

        if self.on_stop is not None:
            self.on_stop()
        self.shutdown()
        return self.rounds_completed

    def shutdown(self) -> None:
        """Final go/release cycle so every parked worker sees cancellation, then join."""
        self.cancel_token.cancel()

        live = [worker for worker in self.live_workers() if worker.is_alive()]
        self.barrier.raise_go()
        self.barrier.wait_all_complete(worker.state.completion for worker in live)
        self.barrier.raise_release()

        for worker in self.workers:
            if not worker.is_alive():
                continue
            worker.join(timeout=self.shutdown_timeout)
            if worker.is_alive():
                logging.warning(f"Worker for {worker.state.address} did not exit within {self.shutdown_timeout}s")

        LIVE_WORKERS.set(0)
        logging.info(f"Scheduler stopped after {self.rounds_completed} rounds")
