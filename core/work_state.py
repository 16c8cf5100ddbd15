"""
Per-target work state and the small synchronization primitives around it.

A TargetWorkState is written only by its own worker and read by the scheduler
after that worker's CompletionSignal fired for the current round.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from enum import Enum

from config import MAX_PAYLOAD_SIZE


class ProbeStatus(str, Enum):
    """Outcome of a single echo exchange."""
    UNKNOWN = "unknown"
    SUCCESS = "success"
    TIMED_OUT = "timed_out"
    DESTINATION_UNREACHABLE = "destination_unreachable"
    TTL_EXPIRED = "ttl_expired"
    FAILURE = "failure"


@dataclass(frozen=True)
class PingOptions:
    """Transmission options shared by every target."""
    ttl: int = 64
    dont_fragment: bool = False


@dataclass(frozen=True)
class PingReply:
    """What the ping executor returns for one exchange."""
    status: ProbeStatus
    roundtrip_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.SUCCESS


def clamp_payload_size(size: int) -> int:
    return min(size, MAX_PAYLOAD_SIZE)


def make_payload(size: int, rng: random.Random | None = None) -> bytes:
    """Pseudo-random echo payload; only its length matters to the probe."""
    rng = rng or random.Random()
    return bytes(rng.randrange(256) for _ in range(size))


class CancellationToken:
    """Set-once shutdown flag passed to every worker and the scheduler."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Sleep up to ``timeout`` seconds; returns True as soon as cancelled."""
        return self._event.wait(timeout)


class CompletionSignal:
    """
    Single-shot, re-armable signal a worker raises once per round.

    The scheduler consumes it (wait + re-arm) exactly once per round, so a
    signal left over from an earlier round can never satisfy a later wait.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    def consume(self) -> None:
        """Block until raised, then re-arm for the next round."""
        self._event.wait()
        self._event.clear()


@dataclass
class TargetWorkState:
    """State slot for one probed target."""
    address: str
    options: PingOptions
    payload_size: int
    timeout_ms: int
    last_roundtrip_ms: int = 0
    last_status: ProbeStatus = ProbeStatus.UNKNOWN
    fatal: bool = False
    completion: CompletionSignal = field(default_factory=CompletionSignal, repr=False, compare=False)
    payload: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        self.payload_size = clamp_payload_size(self.payload_size)
        if len(self.payload) != self.payload_size:
            self.payload = make_payload(self.payload_size)

    def record(self, reply: PingReply) -> None:
        """Apply one probe outcome; round-trip time only moves on success."""
        self.last_status = reply.status
        if reply.ok:
            self.last_roundtrip_ms = reply.roundtrip_ms

    def mark_fatal(self) -> None:
        self.fatal = True
