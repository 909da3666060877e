"""Base exceptions for neo-permissions.

This module defines the base exception hierarchy for the neo-permissions
library. All exceptions inherit from NeoPermissionsError and carry an error
code and a details dictionary for diagnostics.
"""

from typing import Any, Dict, Optional


class NeoPermissionsError(Exception):
    """Base exception for all neo-permissions errors.

    All exceptions in the neo-permissions library inherit from this base class
    and include structured error information for better debugging.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: NeoPermissionsError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-permissions exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
