"""User use cases."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy.exc import IntegrityError

from chatapp.repositories.base import Pagination
from chatapp.repositories.user import UserRepository
from chatapp.services._shared.base import BaseService
from chatapp.services._shared.errors import ConflictError, NotFoundError, ServiceError, violates
from chatapp.services.users.dto import UserCreateIn, UserPublicOut, UserUpdateIn


class UserService(BaseService):
    """
    Application service for the ``User`` aggregate.

    Update and delete always act on the caller's own account; the API layer
    passes the id resolved from the access token subject.
    """

    def list_users(
        self, filters: Mapping[str, object], pagination: Pagination
    ) -> tuple[list[UserPublicOut], int]:
        """Return users filtered and paginated according to request parameters."""
        with self.ro_uow() as uow:
            page = uow.users.paginate(pagination, filters=filters)
            return [UserPublicOut.from_model(u) for u in page.items], page.total

    def create_user(self, dto: UserCreateIn) -> UserPublicOut:
        """
        Create an account.

        :raises ConflictError: When the email is already in use.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")
            try:
                user = repo.add(repo.model(name=dto.name, email=dto.email, password=dto.password))
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise
            return UserPublicOut.from_model(user)

    def update_user(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Update the account identified by ``user_id``.

        Blank fields keep the stored value; a new password is re-hashed by
        the model setter.

        :raises NotFoundError: When the user does not exist.
        :raises ConflictError: When the new email belongs to another account.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            changes = dto.changes()
            new_email = changes.get("email")
            if new_email is not None:
                other = repo.get_by_email(new_email)
                if other is not None and other.id != user.id:
                    raise ConflictError("User", "email already in use")

            try:
                repo.assign_updates(user, changes)
            except ValueError as exc:
                # Model validators reject blank names and malformed emails.
                raise ServiceError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise
            return UserPublicOut.from_model(user)

    def delete_user(self, user_id: int) -> None:
        """
        Delete the account identified by ``user_id``.

        :raises NotFoundError: When the user does not exist.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.delete(user)
