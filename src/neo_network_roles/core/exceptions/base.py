"""Base exceptions for neo-network-roles.

This module defines the root of the exception hierarchy. Every exception
carries an error code and structured details so that operator-facing
callers (the CLI) can render them consistently.
"""

from typing import Any, Dict, Optional


class NetworkRolesError(Exception):
    """Base exception for all neo-network-roles errors."""

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


def create_error_response(exception: NetworkRolesError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-network-roles exception

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
