from __future__ import annotations

"""Prometheus metrics initialization and management."""

import logging

from prometheus_client import Counter, Gauge, start_http_server

# Probe metrics
PROBES_TOTAL = Counter("multiping_probes_total", "Echo exchanges by outcome", ["target", "status"])
PROBE_FAULTS_TOTAL = Counter("multiping_probe_faults_total", "Ping executor faults", ["target"])
LAST_ROUNDTRIP_MS = Gauge("multiping_last_roundtrip_ms", "Last successful round-trip time", ["target"])

# Round metrics
ROUNDS_TOTAL = Counter("multiping_rounds_total", "Completed report rounds")
LIVE_WORKERS = Gauge("multiping_live_workers", "Workers still taking part in rounds")
FATAL_WORKERS = Gauge("multiping_fatal_workers", "Workers retired after a fault")


class MetricsServer:
    """Prometheus metrics HTTP endpoint."""

    def __init__(self, addr: str = "127.0.0.1", port: int = 8000) -> None:
        self.addr = addr
        self.port = port
        self._running = False

    def start(self) -> None:
        """Start metrics server in a background thread."""
        if self._running:
            return
        if self.addr not in ("127.0.0.1", "localhost"):
            logging.warning(f"Metrics exposed on {self.addr}:{self.port} without authentication")
        start_http_server(self.port, addr=self.addr)
        self._running = True
        logging.info(f"Metrics server started on http://{self.addr}:{self.port}")


def start_metrics_server(addr: str = "127.0.0.1", port: int = 8000) -> MetricsServer | None:
    """Start the metrics endpoint; returns None when the port cannot be bound."""
    try:
        server = MetricsServer(addr=addr, port=port)
        server.start()
        return server
    except OSError as exc:
        logging.error(f"Failed to start metrics server: {exc}")
        return None
