"""Logging configuration for neo-permissions.

Configures only the ``neo_permissions`` logger tree so that importing the
library never replaces the host application's root logging setup.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional


PACKAGE_LOGGER = "neo_permissions"


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Warnings and above
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging, including resolution traces


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Logging configuration manager for the neo_permissions logger tree."""

    # Modules that stay quiet unless running at DEBUG
    DEFAULT_QUIET_MODULES = [
        "neo_permissions.registry.membership_graph",
        "neo_permissions.core.events.event",
    ]

    @classmethod
    def build_config(
        cls,
        log_verbosity: str = LogVerbosity.NORMAL.value,
        log_format: str = LogFormat.SIMPLE.value,
        log_level: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build the dictConfig mapping.

        Args:
            log_verbosity: Verbosity mode, mapped to a level
            log_format: One of simple, detailed or json
            log_level: Explicit level; overrides the verbosity mapping

        Returns:
            Configuration suitable for logging.config.dictConfig
        """
        effective_log_level = (log_level or get_log_level_from_verbosity(log_verbosity)).upper()

        try:
            format_string = FORMAT_STRINGS[LogFormat(log_format.lower())]
        except ValueError:
            format_string = FORMAT_STRINGS[LogFormat.SIMPLE]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "neo_permissions": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "neo_permissions_console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "neo_permissions",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "level": effective_log_level,
                    "handlers": ["neo_permissions_console"],
                    "propagate": False,
                },
            },
        }

        for module in cls.DEFAULT_QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
            }

        return logging_config

    @classmethod
    def configure(cls, settings: Optional[Any] = None) -> None:
        """Configure logging from settings, or from environment variables.

        Args:
            settings: Object with log_level, log_verbosity and log_format
                attributes (e.g. RegistrySettings). When omitted, LOG_LEVEL,
                LOG_VERBOSITY and LOG_FORMAT are read from the environment.
        """
        if settings is not None:
            log_level = _enum_value(settings.log_level)
            log_verbosity = _enum_value(settings.log_verbosity)
            log_format = _enum_value(settings.log_format)
        else:
            log_level = os.getenv("LOG_LEVEL")
            log_verbosity = os.getenv("LOG_VERBOSITY", LogVerbosity.NORMAL.value)
            log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value)

        logging_config = cls.build_config(log_verbosity, log_format, log_level)
        logging.config.dictConfig(logging_config)

        logger = logging.getLogger(__name__)
        logger.debug(
            f"Logging configured: level={logging_config['loggers'][PACKAGE_LOGGER]['level']}, "
            f"format={log_format}"
        )


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value.value if isinstance(value, Enum) else str(value)


def setup_logging(settings: Optional[Any] = None) -> None:
    """Setup logging for neo-permissions.

    Called once on package import with environment defaults; call again
    with RegistrySettings to apply explicit configuration.
    """
    LoggingConfig.configure(settings)
