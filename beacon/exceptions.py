"""Beacon exceptions.

All exceptions inherit from BeaconError for easy catching. Each carries a
stable ``code`` which the HTTP layer maps to a status; the ``message`` is the
only text that ever crosses the API boundary.
"""

from __future__ import annotations


class BeaconError(Exception):
    """Base exception for Beacon errors."""

    def __init__(self, message: str, code: str):
        self.message = message
        self.code = code
        super().__init__(message)


# ==================== Input Errors ====================


class ValidationError(BeaconError):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, field: str | None = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)
        self.field = field


class InvalidPasswordError(ValidationError):
    """Raised when a new password does not meet the policy."""

    def __init__(self, message: str = "Password must be at least 8 characters."):
        super().__init__(message=message, field="password", code="INVALID_PASSWORD")


# ==================== Account Errors ====================


class AccountExistsError(BeaconError):
    """Raised when creation is requested for an account that already exists."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists. Use 'Resend Credentials' if you want to reset the password.",
            code="ACCOUNT_EXISTS",
        )
        self.email = email


class AccountNotFoundError(BeaconError):
    """Raised when an operation needs an account that does not exist."""

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(
            message=message or f"User '{identifier}' not found",
            code="ACCOUNT_NOT_FOUND",
        )
        self.identifier = identifier


# ==================== Token Errors ====================


class InvalidOrExpiredTokenError(BeaconError):
    """Raised when a reset token is unknown, already used or expired."""

    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(message=message, code="INVALID_OR_EXPIRED_TOKEN")


# ==================== Collaborator Errors ====================


class IdentityProviderError(BeaconError):
    """Raised when identity provider operations fail."""

    def __init__(self, message: str, operation: str):
        super().__init__(message=message, code="IDENTITY_PROVIDER_ERROR")
        self.operation = operation


class NotificationError(BeaconError):
    """Raised when a message could not be delivered."""

    def __init__(self, message: str, recipient: str | None = None):
        super().__init__(message=message, code="NOTIFICATION_ERROR")
        self.recipient = recipient
