import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings using Pydantic Settings.
    Reads MULTIPING_* environment variables and provides type safety and validation.
    Probe parameters given on the command line override the DEFAULT_* values.
    """

    # ─────────────────────────────────────────────────────────────────────────────
    # Version
    # ─────────────────────────────────────────────────────────────────────────────
    VERSION: str = "1.0.0"
    # Also update pyproject.toml (version)

    # ─────────────────────────────────────────────────────────────────────────────
    # Probe Defaults
    # ─────────────────────────────────────────────────────────────────────────────
    DEFAULT_PAYLOAD_SIZE: int = Field(default=32, ge=0)
    DEFAULT_TTL: int = Field(default=64, ge=1, le=255)
    DEFAULT_RATE_MS: int = Field(default=1000, ge=0, description="Pause between rounds")
    DEFAULT_TIMEOUT_MS: int = Field(default=4000, gt=0, description="Reply timeout per probe")

    # Echo payload ceiling; larger requests are clamped, not rejected
    MAX_PAYLOAD_SIZE: int = Field(default=65500, ge=0, le=65500)

    # ─────────────────────────────────────────────────────────────────────────────
    # Ping Command
    # ─────────────────────────────────────────────────────────────────────────────
    PING_COMMAND: str = "ping"
    PING_GRACE_SECONDS: float = Field(default=1.0, ge=0)

    # ─────────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────────
    RTT_COLUMN_WIDTH: int = Field(default=10, ge=1)

    # ─────────────────────────────────────────────────────────────────────────────
    # Shutdown
    # ─────────────────────────────────────────────────────────────────────────────
    SHUTDOWN_TIMEOUT_SECONDS: int = Field(default=10, ge=0)

    # ─────────────────────────────────────────────────────────────────────────────
    # Metrics
    # ─────────────────────────────────────────────────────────────────────────────
    ENABLE_METRICS: bool = False
    METRICS_ADDR: str = "127.0.0.1"
    METRICS_PORT: int = Field(default=8000, ge=1, le=65535)

    # ─────────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────────
    LOG_DIR: str = Field(default=os.path.expanduser("~/.multiping"))
    LOG_FILE: str = Field(default_factory=lambda: os.path.join(os.path.expanduser("~/.multiping"), "multiping.log"))
    LOG_LEVEL: str = "INFO"
    LOG_TRUNCATE_ON_START: bool = True

    model_config = SettingsConfigDict(
        env_prefix="MULTIPING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )
