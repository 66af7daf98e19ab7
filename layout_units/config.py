"""Library configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    layout_units_log_level: str = "info"

    # LRU entries per CachedCalculator
    layout_units_cache_size: int = 256

    # Seed for the shared generator behind `random` behaviours; None = OS entropy
    layout_units_random_seed: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
