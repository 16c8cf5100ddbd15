from __future__ import annotations

import logging
import math
import re
import shutil
import subprocess
import sys
import time
from typing import Any

from config import PING_COMMAND, PING_GRACE_SECONDS
from core.work_state import PingOptions, PingReply, ProbeStatus


class PingExecutorError(Exception):
    """The echo exchange could not be attempted (bad host, missing binary, OS error)."""


# Output fragments meaning the target itself cannot be probed
_FAULT_PATTERNS = (
    "name or service not known",
    "unknown host",
    "could not find host",
    "temporary failure in name resolution",
    "cannot resolve",
    "no address associated",
    "не удается обнаружить узел",
)

_UNREACHABLE_PATTERNS = (
    "unreachable",
    "заданный узел недоступен",
)

_TTL_EXPIRED_PATTERNS = (
    "time to live exceeded",
    "ttl expired",
    "превышен срок жизни",
)

_TIMEOUT_PATTERNS = (
    "request timed out",
    "100% packet loss",
    "100% loss",
    "превышен интервал",
)

_TIME_RE = re.compile(r"(?:time|время)\s*([=<])\s*([0-9]+(?:[.,][0-9]+)?)", re.IGNORECASE)
# iputils/BSD echo line, Windows "Reply from ...: bytes=N"
_REPLY_RE = re.compile(r"\bbytes from\b|\bbytes=\d+", re.IGNORECASE)


class SystemPingExecutor:
    """Ping executor that runs the platform ``ping`` binary once per exchange."""

    def __init__(self, ping_command: str = PING_COMMAND, grace_seconds: float = PING_GRACE_SECONDS) -> None:
        self.ping_command = ping_command
        self.grace_seconds = grace_seconds
        self._ping_path: str | None = None

    def _resolve_ping(self) -> str:
        if self._ping_path is None:
            path = shutil.which(self.ping_command)
            if path is None:
                raise PingExecutorError(f"ping command not found: {self.ping_command}")
            self._ping_path = path
        return self._ping_path

    def build_command(
        self,
        address: str,
        timeout_ms: int,
        payload: bytes,
        options: PingOptions,
    ) -> tuple[list[str], str, dict[str, Any]]:
        """Build the ping command, encoding and extra subprocess kwargs."""
        # Security check: prevent argument injection
        if address.strip().startswith("-"):
            raise PingExecutorError(f"Invalid host '{address}'")

        ping_cmd = self._resolve_ping()
        kwargs: dict[str, Any] = {}

        if sys.platform == "win32":
            cmd = [
                ping_cmd, "-n", "1",
                "-w", str(timeout_ms),
                "-i", str(options.ttl),
                "-l", str(len(payload)),
            ]
            if options.dont_fragment:
                cmd.append("-f")
            encoding = "oem"
            kwargs["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)
        elif sys.platform == "darwin":
            cmd = [
                ping_cmd, "-c", "1", "-n",
                "-W", str(timeout_ms),
                "-m", str(options.ttl),
                "-s", str(len(payload)),
            ]
            if options.dont_fragment:
                cmd.append("-D")
            cmd.extend(self._pattern_args(payload))
            encoding = "utf-8"
        else:
            # iputils takes whole seconds for -W
            cmd = [
                ping_cmd, "-c", "1", "-n",
                "-W", str(max(1, math.ceil(timeout_ms / 1000))),
                "-t", str(options.ttl),
                "-s", str(len(payload)),
                "-M", "do" if options.dont_fragment else "dont",
            ]
            cmd.extend(self._pattern_args(payload))
            encoding = "utf-8"

        cmd.append(address)
        return cmd, encoding, kwargs

    @staticmethod
    def _pattern_args(payload: bytes) -> list[str]:
        """POSIX ping can only take up to 16 pad bytes; the rest repeats them."""
        if not payload:
            return []
        return ["-p", payload[:16].hex()]

    def send(self, address: str, timeout_ms: int, payload: bytes, options: PingOptions) -> PingReply:
        cmd, encoding, kwargs = self.build_command(address, timeout_ms, payload, options)
        logging.debug(f"Running: {' '.join(cmd)}")

        started = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                encoding=encoding,
                errors="replace",
                timeout=timeout_ms / 1000.0 + self.grace_seconds,
                **kwargs,
            )
        except subprocess.TimeoutExpired:
            return PingReply(ProbeStatus.TIMED_OUT)
        except OSError as exc:
            raise PingExecutorError(f"failed to run ping: {exc}") from exc

        elapsed_ms = (time.monotonic() - started) * 1000.0
        return self.parse_output(f"{proc.stdout or ''}\n{proc.stderr or ''}", proc.returncode, elapsed_ms)

    @staticmethod
    def parse_output(output: str, returncode: int, elapsed_ms: float | None = None) -> PingReply:
        """
        Classify ping output into a reply; raises on name-resolution faults.

        POSIX ping omits ``time=`` for payloads under 16 bytes, so an echo line
        without it falls back to ``elapsed_ms``, the wall time of the process.
        """
        lowered = output.lower()

        for pattern in _FAULT_PATTERNS:
            if pattern in lowered:
                raise PingExecutorError(output.strip().splitlines()[0] if output.strip() else pattern)

        # Windows ping exits 0 for some ICMP errors, so check the text first
        if any(p in lowered for p in _UNREACHABLE_PATTERNS):
            return PingReply(ProbeStatus.DESTINATION_UNREACHABLE)
        if any(p in lowered for p in _TTL_EXPIRED_PATTERNS):
            return PingReply(ProbeStatus.TTL_EXPIRED)
        if any(p in lowered for p in _TIMEOUT_PATTERNS):
            return PingReply(ProbeStatus.TIMED_OUT)

        if returncode == 0:
            match = _TIME_RE.search(output)
            if match:
                if match.group(1) == "<":
                    return PingReply(ProbeStatus.SUCCESS, 0)
                value = float(match.group(2).replace(",", "."))
                return PingReply(ProbeStatus.SUCCESS, int(round(value)))
            if _REPLY_RE.search(output):
                return PingReply(ProbeStatus.SUCCESS, int(round(elapsed_ms or 0)))
            logging.warning("ping succeeded but produced no latency info")
            return PingReply(ProbeStatus.FAILURE)

        if returncode == 1:
            # iputils/BSD: no reply received
            return PingReply(ProbeStatus.TIMED_OUT)
        return PingReply(ProbeStatus.FAILURE)

    def is_available(self) -> bool:
        """Check if the ping command is available on the system."""
        return shutil.which(self.ping_command) is not None
