from __future__ import annotations

"""Infrastructure layer for metrics."""

from .metrics import (
    FATAL_WORKERS,
    LAST_ROUNDTRIP_MS,
    LIVE_WORKERS,
    PROBE_FAULTS_TOTAL,
    PROBES_TOTAL,
    ROUNDS_TOTAL,
    MetricsServer,
    start_metrics_server,
)

__all__ = [
    "FATAL_WORKERS",
    "LAST_ROUNDTRIP_MS",
    "LIVE_WORKERS",
    "PROBE_FAULTS_TOTAL",
    "PROBES_TOTAL",
    "ROUNDS_TOTAL",
    "MetricsServer",
    "start_metrics_server",
]
