"""
DTOs for UserService.

Data Transfer Objects isolate the service layer from ORM models so that
nothing attached to a session escapes a unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for creating an account.

    :param name: Display name.
    :param email: Login email (normalized by the model).
    :param password: Raw password to be hashed by the model.
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for updating the caller's account.

    ``None`` or blank values keep the stored value.

    :param name: Optional new display name.
    :param email: Optional new email.
    :param password: Optional new raw password.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that carry a non-blank value."""
        return {
            k: v
            for k, v in (("name", self.name), ("email", self.email), ("password", self.password))
            if isinstance(v, str) and v.strip()
        }


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user representation.

    :param id: User identifier.
    :param name: Display name.
    :param email: Login email.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: Any) -> UserPublicOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
