from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Sequence, TextIO

from rich.console import Console
from rich.markup import escape

from config import RTT_COLUMN_WIDTH, t

if TYPE_CHECKING:
    from core import TargetWorkState


# ═══════════════════════════════════════════════════════════════════════════════
# Round report lines
# ═══════════════════════════════════════════════════════════════════════════════

def format_round_line(now: datetime, states: Sequence[TargetWorkState], width: int = RTT_COLUMN_WIDTH) -> str:
    """``HH:MM:SS<TAB>`` then one right-aligned ``<rtt>ms<TAB>`` column per target."""
    columns = "".join(f"{state.last_roundtrip_ms:>{width}}ms\t" for state in states)
    return f"{now:%H:%M:%S}\t{columns}\n"


class RoundReporter:
    """
    Writes one report line per round.

    Lines go straight to the stream rather than through rich, which would
    expand the tab separators.
    """

    def __init__(self, stream: TextIO | None = None, width: int = RTT_COLUMN_WIDTH) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.width = width
        self.lines_written = 0
        self._lock = threading.Lock()

    def report(self, now: datetime, states: Sequence[TargetWorkState]) -> None:
        line = format_round_line(now, states, self.width)
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
            self.lines_written += 1


# ═══════════════════════════════════════════════════════════════════════════════
# Operator messages
# ═══════════════════════════════════════════════════════════════════════════════

USAGE_KEYS = (
    "usage_line_1",
    "usage_line_2",
    "",
    "usage_options",
    "usage_opt_l",
    "usage_opt_f",
    "usage_opt_i",
    "usage_opt_r",
    "usage_opt_w",
)


class ConsoleMessages:
    """Banner, shutdown notice and diagnostics for the operator."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def banner(self) -> None:
        self.console.print(t("banner"), markup=False)

    def finished(self) -> None:
        self.console.print(t("finished"), markup=False)

    def stopping(self) -> None:
        self.console.print(f"[dim]{t('stop')}[/dim]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    def usage(self) -> None:
        for key in USAGE_KEYS:
            self.console.print(t(key) if key else "", markup=False, soft_wrap=True)
