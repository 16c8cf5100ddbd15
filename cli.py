"""
Command-line parsing for multiping.

Flags follow the classic ping layout and accept either ``-x`` or ``/x``:

    multiping [-l size] [-f] [-i TTL] [-r rate] [-w timeout] target[,target2...]
"""

from __future__ import annotations

import argparse
from typing import Sequence

from pydantic import BaseModel, Field, field_validator

from config import (
    DEFAULT_PAYLOAD_SIZE,
    DEFAULT_RATE_MS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TTL,
    MAX_PAYLOAD_SIZE,
    t,
)


class ConfigurationError(Exception):
    """Invalid command line; reported before any worker starts."""

    def __init__(self, message: str, show_usage: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.show_usage = show_usage


class RunOptions(BaseModel):
    """Validated probe parameters for one run."""

    targets: list[str] = Field(min_length=1)
    payload_size: int = Field(default=DEFAULT_PAYLOAD_SIZE, ge=0)
    dont_fragment: bool = False
    ttl: int = Field(default=DEFAULT_TTL, ge=1, le=255)
    rate_ms: int = Field(default=DEFAULT_RATE_MS, ge=0)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("payload_size")
    @classmethod
    def _clamp_payload(cls, value: int) -> int:
        return min(value, MAX_PAYLOAD_SIZE)


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigurationError(message, show_usage=True)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="multiping", prefix_chars="-/", add_help=False)
    parser.add_argument("-l", "/l", dest="size")
    parser.add_argument("-f", "/f", dest="dont_fragment", action="store_true")
    parser.add_argument("-i", "/i", dest="ttl")
    parser.add_argument("-r", "/r", dest="rate")
    parser.add_argument("-w", "/w", dest="timeout")
    parser.add_argument("-h", "--help", "/?", dest="help", action="store_true")
    parser.add_argument("targets", nargs="?")
    return parser


def _parse_int(raw: str | None, default: int, message_key: str, *, unsigned: bool = False) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigurationError(t(message_key)) from None
    if unsigned and value < 0:
        raise ConfigurationError(t(message_key))
    return value


def split_targets(raw: str) -> list[str]:
    """Comma-separated target list, order preserved, blanks dropped."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_args(argv: Sequence[str]) -> RunOptions | None:
    """
    Parse ``argv`` (without the program name).

    Returns None when help was requested.

    Raises:
        ConfigurationError: unparsable or out-of-range value, or no target.
    """
    ns = build_parser().parse_args(list(argv))
    if ns.help:
        return None

    timeout_ms = _parse_int(ns.timeout, DEFAULT_TIMEOUT_MS, "err_parse_timeout")
    ttl = _parse_int(ns.ttl, DEFAULT_TTL, "err_parse_ttl")
    rate_ms = _parse_int(ns.rate, DEFAULT_RATE_MS, "err_parse_rate")
    payload_size = _parse_int(ns.size, DEFAULT_PAYLOAD_SIZE, "err_parse_size", unsigned=True)

    targets = split_targets(ns.targets) if ns.targets else []
    if not targets:
        raise ConfigurationError(t("err_no_target"), show_usage=True)

    if not 1 <= ttl <= 255:
        raise ConfigurationError(t("err_invalid_ttl").format(value=ttl))
    if rate_ms < 0:
        raise ConfigurationError(t("err_invalid_rate").format(value=rate_ms))
    if timeout_ms <= 0:
        raise ConfigurationError(t("err_invalid_timeout").format(value=timeout_ms))

    return RunOptions(
        targets=targets,
        payload_size=payload_size,
        dont_fragment=ns.dont_fragment,
        ttl=ttl,
        rate_ms=rate_ms,
        timeout_ms=timeout_ms,
    )
