"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        retention_seconds: Age after which a verification session is evicted
        cleanup_interval_seconds: Period of the background retention sweep
        max_selected_analyzers: Upper bound on analyzers run per verification
        latency_scale: Multiplier applied to simulated analyzer latency (0 disables delays)
        latency_jitter_seconds: Maximum random latency added per analyzer run
        analyzer_timeout_seconds: Optional per-analyzer time budget
        random_seed: Seed for the stub analyzers' confidence jitter
        max_content_length: Longest content accepted by the screener
        prepared_content_length: Length content is trimmed to before analysis
        rate_limit_max_requests: Verifications allowed per requester per window
        rate_limit_window_seconds: Length of the rate limiting window
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    retention_seconds: int = Field(
        default=3600,
        ge=1,
        description="Retention horizon for verification sessions"
    )
    cleanup_interval_seconds: int = Field(
        default=300,
        ge=1,
        description="Interval between retention sweeps"
    )
    max_selected_analyzers: int = Field(
        default=4,
        ge=1,
        description="Maximum analyzers dispatched for one verification"
    )
    latency_scale: float = Field(
        default=1.0,
        ge=0.0,
        description="Scale factor for simulated analyzer latency"
    )
    latency_jitter_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Maximum random jitter added to simulated latency"
    )
    analyzer_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-analyzer timeout; None waits indefinitely"
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for analyzer confidence randomness (None = unseeded)"
    )
    max_content_length: int = Field(
        default=10_000,
        description="Maximum content length accepted by validation"
    )
    prepared_content_length: int = Field(
        default=5_000,
        description="Content length cap applied before analysis"
    )
    rate_limit_max_requests: int = Field(
        default=10,
        ge=1,
        description="Verifications one requester may start per window"
    )
    rate_limit_window_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Sliding window length for per-requester rate limiting"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "VERIFY_",
    }


# Singleton instance - import this throughout the application
settings = Settings()
