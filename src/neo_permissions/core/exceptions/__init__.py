"""Exceptions module for neo-permissions.

This module provides the complete exception hierarchy for neo-permissions.
"""

from .base import (
    NeoPermissionsError,
    create_error_response,
)

from .registry import (
    ConfigurationError,
    InvalidPathError,
    InvalidOperationError,
    MissingPermissionError,
    UserMissingPermissionError,
    GroupMissingPermissionError,
    PermissionNotDefaultError,
)

__all__ = [
    # Base
    "NeoPermissionsError",
    "create_error_response",

    # Registry errors
    "ConfigurationError",
    "InvalidPathError",
    "InvalidOperationError",

    # Assertion errors
    "MissingPermissionError",
    "UserMissingPermissionError",
    "GroupMissingPermissionError",
    "PermissionNotDefaultError",
]
