import pytest

from chatapp.models.user import User
from chatapp.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from chatapp.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            user = UserFactory.build()  # not persisted
            uow.session.add(user)
            uow.session.flush()

    def test_allows_reads(self, app):
        UserFactory()

        with ROuow() as uow:
            assert uow.session.query(User).count() == 1

    def test_disallows_commit(self, app):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_removed_after_exit(self, app, session):
        with ROuow():
            pass

        user = UserFactory.build()
        session.add(user)
        session.flush()
        assert user.id is not None


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, app):
        with RWuow() as uow:
            uow.users.add(User(name="Kept", email="kept@example.com", password="pw"))

        with ROuow() as uow:
            assert uow.users.get_by_email("kept@example.com") is not None

    def test_rolls_back_on_error(self, app):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(User(name="Lost", email="lost@example.com", password="pw"))
            raise RuntimeError("abort")

        with ROuow() as uow:
            assert uow.users.get_by_email("lost@example.com") is None
