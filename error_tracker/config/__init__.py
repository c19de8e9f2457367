"""Configuration module"""
from error_tracker.config.settings import (
    AppConfig,
    DatabaseConfig,
    ApiConfig,
    LoggingConfig,
    get_config,
    reset_config,
)
from error_tracker.config.timezone import utc_now, as_utc

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ApiConfig",
    "LoggingConfig",
    "get_config",
    "reset_config",
    "utc_now",
    "as_utc",
]
