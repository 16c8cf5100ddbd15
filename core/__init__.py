"""
Round-synchronization engine.

- TargetWorkState: per-target state slot (single writer, read after signal)
- RoundBarrier: two-phase go/release rendezvous
- PingWorker: one thread per target, one probe per round
- RoundScheduler: drives rounds, reports, and shuts workers down
"""

from .work_state import (
    CancellationToken,
    CompletionSignal,
    PingOptions,
    PingReply,
    ProbeStatus,
    TargetWorkState,
    clamp_payload_size,
    make_payload,
)
from .protocols import PingExecutor, RoundSink
from .round_barrier import RoundBarrier
from .ping_worker import PingWorker, WorkerPhase
from .scheduler import RoundScheduler

__all__ = [
    "CancellationToken",
    "CompletionSignal",
    "PingExecutor",
    "PingOptions",
    "PingReply",
    "PingWorker",
    "ProbeStatus",
    "RoundBarrier",
    "RoundScheduler",
    "RoundSink",
    "TargetWorkState",
    "WorkerPhase",
    "clamp_payload_size",
    "make_payload",
]
