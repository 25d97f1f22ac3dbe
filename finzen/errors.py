"""Exception hierarchy.

Every error carries a human-readable ``message``; there are no error codes.
"""
from typing import Optional


class FinZenError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RemoteServiceError(FinZenError):
    """The remote data or identity service failed or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(FinZenError):
    """Missing or rejected credentials."""


class FormValidationError(FinZenError):
    """User input did not pass validation; nothing was written."""
