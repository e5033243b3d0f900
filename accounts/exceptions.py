"""
Account service exceptions.

Exception hierarchy:
    AccountError (base)
    ├── ValidationError
    ├── AuthenticationError
    │   └── InvalidCredentialsError
    ├── PersistenceError
    └── UploadRejectedError

Each class carries the HTTP status it is rendered with, so services can raise
them without knowing about the web layer.
"""

from fastapi import status


class AccountError(Exception):
    """Base exception for all account service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the JSON error body returned by the API."""
        return {"error": self.message}


class ValidationError(AccountError):
    """Raised when request input has the wrong shape or a disallowed field."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AccountError):
    """Raised when a bearer token is missing, invalid or no longer active."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentialsError(AuthenticationError):
    """Raised when login fails.

    The message never says whether the email or the password was wrong.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Unable to login"):
        super().__init__(message)


class PersistenceError(AccountError):
    """Raised when the store rejects or fails a write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UploadRejectedError(AccountError):
    """Raised when an uploaded file violates the size or extension filter."""

    status_code = status.HTTP_400_BAD_REQUEST
