"""Configuration management."""

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Simulator settings."""

    # Pagination
    max_page_size: int = 20
    oversize_factor: int = 3  # Backing entries hold this many times the first requested count

    # Dataset generation
    preview_step_minutes: int = 30
    chat_step_minutes: int = 2
    random_seed: int | None = None  # Fixed seed for reproducible cosmetic fields

    # Simulated network latency (milliseconds)
    preview_latency_min_ms: int = 300
    preview_latency_max_ms: int = 500
    chat_latency_min_ms: int = 200
    chat_latency_max_ms: int = 500
    send_latency_min_ms: int = 100
    send_latency_max_ms: int = 200
    latency_scale: float = 1.0  # 0 keeps the suspension point but skips the wait

    # Failure injection
    send_failure_rate: float = 0.0

    # Sync controllers
    serialize_sends: bool = False

    log_level: str = "INFO"

    @computed_field
    @property
    def latency_enabled(self) -> bool:
        """Whether any real delay is applied."""
        return self.latency_scale > 0

    model_config = SettingsConfigDict(
        env_prefix="CHATSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Global settings instance
settings = Settings()
