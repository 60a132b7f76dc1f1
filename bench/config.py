"""Harness settings loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from bench.values import MIN_POOL_SIZE


class BenchSettings(BaseSettings):
    """Settings that apply to every run, independent of the workload options."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Adapters
    default_adapter: str = "dummy"
    plugin_dir: Optional[Path] = Field(default=None)

    # Size of each worker's pregenerated value pool in characters
    value_pool_size: int = Field(default=MIN_POOL_SIZE, ge=1)

    class Config:
        env_prefix = "KVBENCH_"
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
_settings: Optional[BenchSettings] = None


def get_settings() -> BenchSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = BenchSettings()
    return _settings


def init_settings(**kwargs) -> BenchSettings:
    """Initialize settings with custom values."""
    global _settings
    _settings = BenchSettings(**kwargs)
    return _settings
