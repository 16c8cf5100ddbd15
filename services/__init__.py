"""Network probing services package."""

from .ping_service import PingExecutorError, SystemPingExecutor

__all__ = [
    "PingExecutorError",
    "SystemPingExecutor",
]
