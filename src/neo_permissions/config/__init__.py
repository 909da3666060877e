"""Configuration for neo-permissions: settings and logging."""

from .logging_config import (
    LogFormat,
    LogLevel,
    LogVerbosity,
    LoggingConfig,
    get_log_level_from_verbosity,
    setup_logging,
)
from .settings import RegistrySettings, get_settings, load_settings

__all__ = [
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "LoggingConfig",
    "get_log_level_from_verbosity",
    "setup_logging",
    "RegistrySettings",
    "get_settings",
    "load_settings",
]
