"""
Application configuration settings.

All configuration variables are defined here and can be overridden via
MULTIPING_* environment variables (see settings_model.Settings).
"""

import locale
import os

from .settings_model import Settings

_settings = Settings()

# ─────────────────────────────────────────────────────────────────────────────
# Version
# ─────────────────────────────────────────────────────────────────────────────

VERSION = _settings.VERSION

# ─────────────────────────────────────────────────────────────────────────────
# Language Detection
# ─────────────────────────────────────────────────────────────────────────────

SUPPORTED_LANGUAGES = ["en", "ru"]


def _detect_system_language() -> str:
    """Detect system language and return supported language code."""
    try:
        system_locale = locale.getlocale()[0]
        if system_locale:
            lang_code = system_locale.lower()[:2]
            if lang_code in ("ru", "be", "uk", "kk"):
                return "ru"
        env_lang = os.environ.get("LANG", "")
        if env_lang.lower().startswith("ru"):
            return "ru"
    except (TypeError, ValueError):
        pass
    return "en"


CURRENT_LANGUAGE = _detect_system_language()

# ─────────────────────────────────────────────────────────────────────────────
# Probe Defaults
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_PAYLOAD_SIZE = _settings.DEFAULT_PAYLOAD_SIZE
DEFAULT_TTL = _settings.DEFAULT_TTL
DEFAULT_RATE_MS = _settings.DEFAULT_RATE_MS
DEFAULT_TIMEOUT_MS = _settings.DEFAULT_TIMEOUT_MS
MAX_PAYLOAD_SIZE = _settings.MAX_PAYLOAD_SIZE

# ─────────────────────────────────────────────────────────────────────────────
# Ping Command
# ─────────────────────────────────────────────────────────────────────────────

PING_COMMAND = _settings.PING_COMMAND
PING_GRACE_SECONDS = _settings.PING_GRACE_SECONDS

# ─────────────────────────────────────────────────────────────────────────────
# Output
# ─────────────────────────────────────────────────────────────────────────────

RTT_COLUMN_WIDTH = _settings.RTT_COLUMN_WIDTH

# ─────────────────────────────────────────────────────────────────────────────
# Shutdown
# ─────────────────────────────────────────────────────────────────────────────

SHUTDOWN_TIMEOUT_SECONDS = _settings.SHUTDOWN_TIMEOUT_SECONDS

# ─────────────────────────────────────────────────────────────────────────────
# Metrics
# ─────────────────────────────────────────────────────────────────────────────

ENABLE_METRICS = _settings.ENABLE_METRICS
METRICS_ADDR = _settings.METRICS_ADDR
METRICS_PORT = _settings.METRICS_PORT

# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────

LOG_DIR = _settings.LOG_DIR
LOG_FILE = _settings.LOG_FILE
LOG_LEVEL = _settings.LOG_LEVEL
LOG_TRUNCATE_ON_START = _settings.LOG_TRUNCATE_ON_START
