"""
Two-phase go/release barrier for synchronized probe rounds.

Round protocol:
    scheduler: raise_go() -> wait_all_complete(signals) -> report -> raise_release()
    worker:    wait_go()  -> probe -> completion.set() -> wait_release()

Workers park on an explicit round number instead of a shared boolean, so a
worker that is slow to wake can neither miss a release that already happened
nor run into the next round before the scheduler has read its result.
"""

from __future__ import annotations

import threading
from typing import Iterable

from .work_state import CompletionSignal


class RoundBarrier:
    """Go/release rendezvous owned by the scheduler and shared with workers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._go_round = 0
        self._released_round = 0

    @property
    def current_round(self) -> int:
        with self._cond:
            return self._go_round

    def raise_go(self) -> int:
        """Open the next round and wake every worker parked in wait_go()."""
        with self._cond:
            self._go_round += 1
            self._cond.notify_all()
            return self._go_round

    def raise_release(self) -> None:
        """Release workers parked after reporting the current round."""
        with self._cond:
            self._released_round = self._go_round
            self._cond.notify_all()

    def wait_go(self, after_round: int) -> int:
        """Block until a round newer than ``after_round`` starts; returns its number."""
        with self._cond:
            self._cond.wait_for(lambda: self._go_round > after_round)
            return self._go_round

    def wait_release(self, round_no: int) -> None:
        """Block until ``round_no`` has been released."""
        with self._cond:
            self._cond.wait_for(lambda: self._released_round >= round_no)

    @staticmethod
    def wait_all_complete(signals: Iterable[CompletionSignal]) -> None:
        """
        Block until every signal fired for this round, consuming each one.

        No timeout: a stalled worker stalls the whole round.
        """
        for signal in signals:
            signal.consume()
