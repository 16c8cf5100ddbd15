"""
Configuration package.

Re-exports settings constants and the t() message lookup so callers can write
``from config import DEFAULT_TTL, t``.
"""

from .settings import (
    CURRENT_LANGUAGE,
    DEFAULT_PAYLOAD_SIZE,
    DEFAULT_RATE_MS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TTL,
    ENABLE_METRICS,
    LOG_DIR,
    LOG_FILE,
    LOG_LEVEL,
    LOG_TRUNCATE_ON_START,
    MAX_PAYLOAD_SIZE,
    METRICS_ADDR,
    METRICS_PORT,
    PING_COMMAND,
    PING_GRACE_SECONDS,
    RTT_COLUMN_WIDTH,
    SHUTDOWN_TIMEOUT_SECONDS,
    SUPPORTED_LANGUAGES,
    VERSION,
)
from .i18n import LANG, t

__all__ = [
    "CURRENT_LANGUAGE",
    "DEFAULT_PAYLOAD_SIZE",
    "DEFAULT_RATE_MS",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_TTL",
    "ENABLE_METRICS",
    "LANG",
    "LOG_DIR",
    "LOG_FILE",
    "LOG_LEVEL",
    "LOG_TRUNCATE_ON_START",
    "MAX_PAYLOAD_SIZE",
    "METRICS_ADDR",
    "METRICS_PORT",
    "PING_COMMAND",
    "PING_GRACE_SECONDS",
    "RTT_COLUMN_WIDTH",
    "SHUTDOWN_TIMEOUT_SECONDS",
    "SUPPORTED_LANGUAGES",
    "VERSION",
    "t",
]
