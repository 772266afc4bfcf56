# tests/unit/services/test_auth_service.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import timedelta

import pytest

from chatapp.services._shared.errors import (
    AuthFailure,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    TokenSigningError,
)
from chatapp.services._shared.ports import InMemoryUserLookup
from chatapp.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut, RegisterIn
from chatapp.services.auth.service import AuthService
from chatapp.services.auth.tokens import TokenKind
from tests.factories.user import DEFAULT_PASSWORD, UserFactory

TOKEN_CFG = AuthTokenConfig(access_expires=timedelta(hours=1), refresh_expires=timedelta(days=7))


@dataclass
class FakeUser:
    """Account double satisfying the ``Credentialed`` port."""

    id: int
    name: str
    email: str
    password: str

    @property
    def subject(self) -> str:
        return str(self.id)

    def verify_password(self, raw: str) -> bool:
        return raw == self.password


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def lookup() -> InMemoryUserLookup:
    return InMemoryUserLookup(
        [
            FakeUser(id=1, name="Ada", email="ada@example.com", password="s3cret"),
            FakeUser(id=2, name="Bob", email="bob@example.com", password="hunter2"),
        ]
    )


@pytest.fixture()
def service(registry, signer, lookup) -> AuthService:
    """AuthService wired to the app's registry/signer and an in-memory account lookup."""
    return AuthService(registry=registry, signer=signer, token_cfg=TOKEN_CFG, user_lookup=lookup)


# -------------------------------- Login ----------------------------------- #
class TestLogin:
    def test_issues_registered_session_pair(self, service, registry, signer):
        out = service.login(LoginIn(email="ada@example.com", password="s3cret"))

        assert isinstance(out, LoginOut)
        assert (out.id, out.name, out.email) == (1, "Ada", "ada@example.com")

        access = signer.verify(out.access_token)
        refresh = signer.verify(out.refresh_token)
        assert access.kind is TokenKind.ACCESS
        assert refresh.kind is TokenKind.REFRESH
        assert access.subject == refresh.subject == "1"
        assert access.id != refresh.id
        assert registry.get(access.id) == access
        assert registry.get(refresh.id) == refresh

    def test_lifetimes_follow_config(self, service, signer, frozen):
        out = service.login(LoginIn(email="ada@example.com", password="s3cret"))

        access = signer.verify(out.access_token)
        refresh = signer.verify(out.refresh_token)
        assert access.expires_at - access.issued_at == timedelta(hours=1)
        assert refresh.expires_at - refresh.issued_at == timedelta(days=7)
        assert access.issued_at == refresh.issued_at

    def test_email_lookup_is_case_insensitive(self, service):
        out = service.login(LoginIn(email="  ADA@example.com", password="s3cret"))
        assert out.id == 1

    @pytest.mark.parametrize(
        "email,password",
        [("ada@example.com", "wrong"), ("nobody@example.com", "s3cret")],
    )
    def test_bad_credentials_create_no_entries(self, service, registry, email, password):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            service.login(LoginIn(email=email, password=password))

        assert exc_info.value.reason is AuthFailure.INVALID_CREDENTIALS
        assert len(registry) == 0

    def test_unknown_email_and_wrong_password_are_indistinguishable(self, service):
        errors = []
        for email, password in [("ada@example.com", "wrong"), ("ghost@example.com", "x")]:
            with pytest.raises(InvalidCredentialsError) as exc_info:
                service.login(LoginIn(email=email, password=password))
            errors.append(exc_info.value)

        assert type(errors[0]) is type(errors[1])
        assert str(errors[0]) == str(errors[1])
        assert errors[0].public_message == errors[1].public_message

    def test_signing_failure_propagates(self, registry, lookup):
        class BrokenSigner:
            def sign(self, token):
                raise TokenSigningError("boom")

            def verify(self, raw):  # pragma: no cover
                raise AssertionError

        service = AuthService(
            registry=registry, signer=BrokenSigner(), token_cfg=TOKEN_CFG, user_lookup=lookup
        )
        with pytest.raises(TokenSigningError):
            service.login(LoginIn(email="ada@example.com", password="s3cret"))

    def test_concurrent_logins_yield_disjoint_retrievable_pairs(self, app, service, registry, signer):
        def _login(i: int):
            email, password = [("ada@example.com", "s3cret"), ("bob@example.com", "hunter2")][i % 2]
            with app.app_context():
                out = service.login(LoginIn(email=email, password=password))
                access, refresh = signer.verify(out.access_token), signer.verify(out.refresh_token)
                # visible to the same thread right after login returns
                assert registry.get(access.id) is not None
                assert registry.get(refresh.id) is not None
                return access.id, refresh.id

        with ThreadPoolExecutor(max_workers=8) as pool:
            pairs = list(pool.map(_login, range(40)))

        ids = [tid for pair in pairs for tid in pair]
        assert len(set(ids)) == len(ids) == 80
        assert len(registry) == 80


class TestLoginWithRepository:
    def test_default_lookup_uses_user_repository(self, registry, signer):
        user = UserFactory(email="repo@example.com")
        service = AuthService(registry=registry, signer=signer, token_cfg=TOKEN_CFG)

        out = service.login(LoginIn(email="repo@example.com", password=DEFAULT_PASSWORD))

        assert out.id == user.id
        assert signer.verify(out.access_token).subject == str(user.id)

    def test_wrong_password_against_repository(self, registry, signer):
        UserFactory(email="repo@example.com")
        service = AuthService(registry=registry, signer=signer, token_cfg=TOKEN_CFG)

        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email="repo@example.com", password="nope"))
        assert len(registry) == 0


# ------------------------- Register / whoami ------------------------------ #
class TestRegisterAndWhoami:
    @pytest.fixture()
    def service(self, registry, signer) -> AuthService:
        return AuthService(registry=registry, signer=signer, token_cfg=TOKEN_CFG)

    def test_register_then_whoami(self, service):
        created = service.register(RegisterIn(name="Cleo", email="Cleo@Example.com", password="longpassword"))

        assert created.email == "cleo@example.com"
        assert service.whoami(str(created.id)).name == "Cleo"

    def test_register_duplicate_email(self, service):
        UserFactory(email="dup@example.com")

        with pytest.raises(ConflictError):
            service.register(RegisterIn(name="Dup", email="DUP@example.com", password="longpassword"))

    @pytest.mark.parametrize("subject", ["999", "not-a-number"])
    def test_whoami_unknown_subject(self, service, subject):
        with pytest.raises(NotFoundError):
            service.whoami(subject)
