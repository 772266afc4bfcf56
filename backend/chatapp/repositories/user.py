"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from chatapp.models.user import User
from chatapp.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It satisfies the ``UserLookup`` port used by the login flow but never
    touches tokens itself.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "name": User.name,
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "name": User.name,
            "email": User.email,
        }

    def _updatable_fields(self):
        # ``password`` goes through the model's hashing setter.
        return {"name", "email", "password"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())
