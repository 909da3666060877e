"""Registry settings.

Environment-driven configuration for building a permissions registry.
Every field can be set through a ``NEO_PERMISSIONS_``-prefixed environment
variable or a ``.env`` file.
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from .logging_config import LogFormat, LogLevel, LogVerbosity


class RegistrySettings(BaseSettings):
    """Settings controlling how create_permissions_registry composes a registry."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_PERMISSIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Composition
    thread_safe: bool = Field(default=True, description="Wrap the registry in a re-entrant lock")
    enable_events: bool = Field(default=False, description="Raise change events after mutations")
    validate_ids: bool = Field(default=False, description="Reject user ids the converters cannot round-trip")
    enable_cache: bool = Field(default=False, description="Cache query results until the next mutation")
    cache_max_size: int = Field(default=1000, ge=1, description="Most query results kept before LRU eviction")

    # Logging
    log_level: Optional[LogLevel] = Field(default=None, description="Explicit level, overrides verbosity")
    log_verbosity: LogVerbosity = LogVerbosity.NORMAL
    log_format: LogFormat = LogFormat.SIMPLE

    @field_validator("log_level", "log_verbosity", mode="before")
    @classmethod
    def _upper_case(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_case(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


def load_settings(**overrides: Any) -> RegistrySettings:
    """Build settings from the environment plus explicit overrides.

    Raises:
        ConfigurationError: If any value fails validation
    """
    try:
        return RegistrySettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid neo-permissions configuration: {e.error_count()} error(s)",
            details={"errors": [
                {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]},
        ) from e


@lru_cache()
def get_settings() -> RegistrySettings:
    """Get cached settings instance."""
    return load_settings()
