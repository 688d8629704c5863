"""Configuration management for fin-tilt."""

from .models import (
    AppConfig,
    StockConfig,
    HoldingsCsvConfig,
    LoggingConfig,
)
from .loader import load_config, build_policy

__all__ = [
    "AppConfig",
    "StockConfig",
    "HoldingsCsvConfig",
    "LoggingConfig",
    "load_config",
    "build_policy",
]
