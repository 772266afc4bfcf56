from __future__ import annotations

import pytest

from chatapp.repositories.base import Pagination
from chatapp.services._shared.errors import ConflictError, NotFoundError, ServiceError
from chatapp.services.users.dto import UserCreateIn, UserUpdateIn
from chatapp.services.users.service import UserService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def service(app) -> UserService:
    return UserService()


class TestUserService:
    def test_create_user(self, service):
        out = service.create_user(UserCreateIn(name="Ada", email="ADA@example.com", password="longpassword"))

        assert out.id is not None
        assert out.email == "ada@example.com"
        assert out.created_at is not None

    def test_create_duplicate_email(self, service):
        UserFactory(email="taken@example.com")

        with pytest.raises(ConflictError):
            service.create_user(UserCreateIn(name="X", email="taken@example.com", password="longpassword"))

    def test_create_with_blank_name(self, service):
        with pytest.raises(ServiceError):
            service.create_user(UserCreateIn(name="   ", email="x@example.com", password="longpassword"))

    def test_list_filters_sorts_and_paginates(self, service):
        UserFactory(name="Carol", email="carol@example.com")
        UserFactory(name="Alice", email="alice@example.com")
        UserFactory(name="Bob", email="bob@example.com")

        items, total = service.list_users({}, Pagination(page=1, limit=2, sort=["name"]))
        assert total == 3
        assert [u.name for u in items] == ["Alice", "Bob"]

        items, total = service.list_users({"email": "carol@example.com"}, Pagination(page=1, limit=20, sort=[]))
        assert total == 1
        assert items[0].name == "Carol"

        items, _ = service.list_users({"name": None}, Pagination(page=2, limit=2, sort=["-name"]))
        assert [u.name for u in items] == ["Alice"]

    def test_update_changes_only_non_blank_fields(self, service):
        user = UserFactory(name="Old", email="old@example.com")

        out = service.update_user(user.id, UserUpdateIn(name="New", email="", password=None))

        assert out.name == "New"
        assert out.email == "old@example.com"

    def test_update_rehashes_password(self, service, session):
        user = UserFactory(email="pw@example.com")

        service.update_user(user.id, UserUpdateIn(password="brand-new-password"))

        session.refresh(user)
        assert user.verify_password("brand-new-password")
        assert not user.verify_password(DEFAULT_PASSWORD)

    def test_update_email_collision(self, service):
        UserFactory(email="first@example.com")
        second = UserFactory(email="second@example.com")

        with pytest.raises(ConflictError):
            service.update_user(second.id, UserUpdateIn(email="FIRST@example.com"))

    def test_update_to_own_email_is_allowed(self, service):
        user = UserFactory(email="me@example.com")

        out = service.update_user(user.id, UserUpdateIn(email="ME@example.com", name="Me"))
        assert out.email == "me@example.com"

    def test_update_invalid_email(self, service):
        user = UserFactory()

        with pytest.raises(ServiceError):
            service.update_user(user.id, UserUpdateIn(email="not-an-email"))

    def test_update_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.update_user(12345, UserUpdateIn(name="Nobody"))

    def test_delete_user(self, service):
        user = UserFactory()
        user_id = user.id

        service.delete_user(user_id)

        with pytest.raises(NotFoundError):
            service.delete_user(user_id)
