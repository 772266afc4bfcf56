"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concerns. The translation to RFC 7807 responses happens in
``BaseService.translate_exceptions()`` and ``chatapp/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Database constraint name (e.g. ``uq_users_email``).
    :returns: ``True`` if the error message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Any subclass without a dedicated mapping surfaces as a 400.
    """


# --------------------------------------------------------------------------- #
# Lookup / persistence errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., ``"User"`` or ``"Token"``).
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., ``"User"``).
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthFailure(str, Enum):
    """Closed set of reasons a credential can be rejected."""

    MISSING_TOKEN = "missing_token"
    MALFORMED_HEADER = "malformed_header"
    INVALID_TOKEN = "invalid_token"
    EXPIRED = "expired"
    REVOKED = "revoked"
    UNKNOWN_TOKEN = "unknown_token"
    WRONG_KIND = "wrong_kind"
    INVALID_CREDENTIALS = "invalid_credentials"


# Clients see one message for every reason except ``WRONG_KIND``.
GENERIC_AUTH_MESSAGE = "Authentication required"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
WRONG_KIND_MESSAGE = "Using refresh token when access token is required"


class AuthenticationError(ServiceError):
    """
    Raised when a request credential is rejected.

    :param reason: Why the credential was rejected. Logged, never shown to clients.
    :type reason: AuthFailure
    """

    public_message = GENERIC_AUTH_MESSAGE

    def __init__(self, reason: AuthFailure) -> None:
        super().__init__(reason.value)
        self.reason = reason


class InvalidCredentialsError(AuthenticationError):
    """Raised when login fails, for an unknown email or a password mismatch alike."""

    public_message = INVALID_CREDENTIALS_MESSAGE

    def __init__(self) -> None:
        super().__init__(AuthFailure.INVALID_CREDENTIALS)


class WrongTokenKindError(AuthenticationError):
    """Raised when a refresh token is presented where an access token is required."""

    public_message = WRONG_KIND_MESSAGE

    def __init__(self) -> None:
        super().__init__(AuthFailure.WRONG_KIND)


# --------------------------------------------------------------------------- #
# Token signature errors
# --------------------------------------------------------------------------- #


class TokenVerificationError(ServiceError):
    """Raised when a token string fails decoding or signature verification."""


class TokenExpiredError(TokenVerificationError):
    """Raised when the token signature is valid but its ``exp`` has passed."""


class TokenSigningError(ServiceError):
    """Raised when a token cannot be encoded. Surfaces as an internal error."""
