from __future__ import annotations

from typing import Any, Optional


class TodoClientError(RuntimeError):
    """Base error for the to-do client."""


class TransportError(TodoClientError):
    """No response was obtained from the backend (network failure, timeout)."""


class RemoteError(TodoClientError):
    """Backend answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class ValidationError(RemoteError):
    """Backend rejected the submitted data (400/422)."""


class AuthError(RemoteError):
    """Backend rejected the credential (401)."""


class RegistrationError(RemoteError):
    """Registration endpoint answered with a non-success status."""


class LoginError(RemoteError):
    """Login endpoint answered with a non-success status."""


class TokenMissingError(LoginError):
    """Login succeeded at the HTTP level but no token could be extracted."""


AUTH_FAILURE_STATUSES = (401,)
VALIDATION_STATUSES = (400, 422)


def error_for_status(status_code: int, message: str, payload: Any = None) -> RemoteError:
    """Classify a non-success task-endpoint response into the error taxonomy."""
    if status_code in AUTH_FAILURE_STATUSES:
        return AuthError(message, status_code=status_code, payload=payload)
    if status_code in VALIDATION_STATUSES:
        return ValidationError(message, status_code=status_code, payload=payload)
    return RemoteError(message, status_code=status_code, payload=payload)


__all__ = [
    "TodoClientError",
    "TransportError",
    "RemoteError",
    "ValidationError",
    "AuthError",
    "RegistrationError",
    "LoginError",
    "TokenMissingError",
    "AUTH_FAILURE_STATUSES",
    "VALIDATION_STATUSES",
    "error_for_status",
]
