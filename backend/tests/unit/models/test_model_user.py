"""Tests for the User model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from chatapp.models.user import User


class TestUser:
    def test_password_hashing(self, session):
        u = User(email="Test@Example.com", name="Tester")
        u.password = "secret123"
        session.add(u)
        session.commit()
        assert u.password_hash != "secret123"
        assert u.verify_password("secret123") is True
        assert u.verify_password("wrong") is False
        assert u.verify_password("") is False

    def test_password_is_write_only(self):
        u = User(email="a@example.com", name="u1")
        u.password = "x"
        with pytest.raises(AttributeError):
            _ = u.password

    def test_empty_password_rejected(self):
        u = User(email="a@example.com", name="u1")
        with pytest.raises(ValueError):
            u.password = ""

    def test_email_normalized_and_unique(self, session):
        u1 = User(email=" Alice@Example.com ", name="Alice")
        u1.password = "pw"
        session.add(u1)
        session.commit()
        assert u1.email == "alice@example.com"

        u2 = User(email="alice@example.com", name="Alice 2")
        u2.password = "pw"
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    @pytest.mark.parametrize("email", ["", "no-at-sign", "user@localhost"])
    def test_invalid_email(self, email):
        with pytest.raises(ValueError):
            User(email=email, name="x")

    def test_name_trimmed_and_required(self):
        assert User(email="n@example.com", name="  Ann ").name == "Ann"
        with pytest.raises(ValueError):
            User(email="n@example.com", name="  ")

    def test_subject_is_stringified_id(self, session):
        u = User(email="s@example.com", name="S")
        u.password = "pw"
        session.add(u)
        session.commit()
        assert u.subject == str(u.id)

    def test_deleted_id_is_not_reissued(self, session):
        first = User(email="first@example.com", name="First")
        first.password = "pw"
        session.add(first)
        session.commit()
        first_id = first.id

        session.delete(first)
        session.commit()

        second = User(email="second@example.com", name="Second")
        second.password = "pw"
        session.add(second)
        session.commit()
        assert second.id > first_id
