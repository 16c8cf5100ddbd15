"""
Collaborator protocols for the round engine.

The worker and scheduler depend on these abstractions rather than on the
system ping executor or the console reporter, so tests can pass in fakes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .work_state import PingOptions, PingReply, TargetWorkState


@runtime_checkable
class PingExecutor(Protocol):
    """
    Performs one echo exchange.

    Any class with a matching ``send`` can be used by PingWorker:
    - SystemPingExecutor (runs the platform ping binary)
    - scripted fakes in tests
    """

    def send(self, address: str, timeout_ms: int, payload: bytes, options: PingOptions) -> PingReply:
        """
        Send one echo request and wait for its reply.

        Returns:
            PingReply with the status; ``roundtrip_ms`` is meaningful on success only.

        Raises:
            PingExecutorError: the exchange could not be attempted at all.
        """
        ...


@runtime_checkable
class RoundSink(Protocol):
    """Receives one report per completed round, in input target order."""

    def report(self, now: datetime, states: Sequence[TargetWorkState]) -> None:
        ...
