"""
Ping worker - one thread per target, one probe per round.

Phases:
    IDLE -> WAIT_GO -> SENDING -> REPORTING -> WAIT_RELEASE -> WAIT_GO -> ...
    WAIT_GO -> EXITING   (cancellation observed)
    SENDING -> FATAL     (executor fault)

Both terminal phases raise the completion signal once more before the thread
ends, so the scheduler's wait for the round in progress always returns.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING

from infrastructure import LAST_ROUNDTRIP_MS, PROBE_FAULTS_TOTAL, PROBES_TOTAL

if TYPE_CHECKING:
    from .protocols import PingExecutor
    from .round_barrier import RoundBarrier
    from .work_state import CancellationToken, TargetWorkState


class WorkerPhase(str, Enum):
    IDLE = "idle"
    WAIT_GO = "wait_go"
    SENDING = "sending"
    REPORTING = "reporting"
    WAIT_RELEASE = "wait_release"
    EXITING = "exiting"
    FATAL = "fatal"

    @property
    def terminal(self) -> bool:
        return self in (WorkerPhase.EXITING, WorkerPhase.FATAL)


class PingWorker(threading.Thread):
    """Probes a single target in lock-step with the other workers."""

    def __init__(
        self,
        state: TargetWorkState,
        executor: PingExecutor,
        barrier: RoundBarrier,
        cancel_token: CancellationToken,
    ) -> None:
        super().__init__(name=f"multiping-{state.address}", daemon=True)
        self.state = state
        self.executor = executor
        self.barrier = barrier
        self.cancel_token = cancel_token
        self.phase = WorkerPhase.IDLE
        self.rounds_probed = 0

    @property
    def retired(self) -> bool:
        """True once the worker will never signal completion again."""
        return self.phase.terminal

    def run(self) -> None:
        state = self.state
        logging.info(f"Starting worker thread for {state.address}")
        last_round = 0

        while True:
            self.phase = WorkerPhase.WAIT_GO
            last_round = self.barrier.wait_go(last_round)

            if self.cancel_token.is_cancelled:
                self.phase = WorkerPhase.EXITING
                break

            self.phase = WorkerPhase.SENDING
            if not self._probe():
                self.phase = WorkerPhase.FATAL
                break

            self.phase = WorkerPhase.REPORTING
            state.completion.set()

            self.phase = WorkerPhase.WAIT_RELEASE
            self.barrier.wait_release(last_round)

        state.completion.set()
        logging.info(f"Exiting worker thread for {state.address} ({self.phase.value})")

    def _probe(self) -> bool:
        """Run one exchange; returns False when the worker must retire."""
        state = self.state
        try:
            reply = self.executor.send(state.address, state.timeout_ms, state.payload, state.options)
        except Exception as exc:
            logging.error(f"Exception in sending ping: {exc} for {state.address}")
            state.mark_fatal()
            PROBE_FAULTS_TOTAL.labels(target=state.address).inc()
            return False

        state.record(reply)
        self.rounds_probed += 1
        PROBES_TOTAL.labels(target=state.address, status=reply.status.value).inc()
        if reply.ok:
            LAST_ROUNDTRIP_MS.labels(target=state.address).set(reply.roundtrip_ms)
        else:
            logging.debug(f"{state.address}: {reply.status.value}")
        return True
