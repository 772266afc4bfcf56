"""Tests for the immutable token record."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime, timedelta

import pytest

from chatapp.services.auth.tokens import Token, TokenKind

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def _token(**overrides) -> Token:
    values = {
        "id": "a1",
        "kind": TokenKind.ACCESS,
        "subject": "42",
        "issued_at": NOW,
        "expires_at": NOW + timedelta(hours=1),
    }
    values.update(overrides)
    return Token(**values)


class TestToken:
    def test_issue_generates_distinct_ids_and_truncates_seconds(self):
        now = NOW.replace(microsecond=123456)
        first = Token.issue(kind=TokenKind.ACCESS, subject="1", lifetime=timedelta(hours=1), now=now)
        second = Token.issue(kind=TokenKind.ACCESS, subject="1", lifetime=timedelta(hours=1), now=now)

        assert first.id != second.id
        assert first.issued_at == NOW
        assert first.expires_at == NOW + timedelta(hours=1)
        assert first.revoked is False

    def test_is_frozen(self):
        token = _token()
        with pytest.raises(FrozenInstanceError):
            token.revoked = True  # type: ignore[misc]

    def test_as_revoked_returns_copy(self):
        token = _token()
        revoked = token.as_revoked()

        assert revoked.revoked is True
        assert token.revoked is False
        assert revoked.id == token.id

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": ""},
            {"subject": ""},
            {"kind": "access"},
            {"issued_at": datetime(2024, 5, 1, 12, 0, 0)},
            {"expires_at": NOW},
            {"expires_at": NOW - timedelta(seconds=1)},
        ],
    )
    def test_rejects_invalid_fields(self, overrides):
        with pytest.raises(ValueError):
            _token(**overrides)

    def test_validity_window(self):
        token = _token()

        assert token.is_active(NOW)
        assert token.is_active(NOW + timedelta(minutes=59, seconds=59))
        assert not token.is_active(NOW + timedelta(hours=1))
        assert not token.is_active(NOW - timedelta(seconds=1))
        assert token.is_expired(NOW + timedelta(hours=1))


class TestFromClaims:
    def _claims(self, **overrides):
        claims = {
            "jti": "r1",
            "type": "refresh",
            "sub": "7",
            "iat": int(NOW.timestamp()),
            "exp": int((NOW + timedelta(days=7)).timestamp()),
            "revoked": False,
        }
        claims.update(overrides)
        return claims

    def test_builds_record(self):
        token = Token.from_claims(self._claims())

        assert token == Token(
            id="r1",
            kind=TokenKind.REFRESH,
            subject="7",
            issued_at=NOW,
            expires_at=NOW + timedelta(days=7),
        )

    def test_revoked_claim_defaults_to_false(self):
        claims = self._claims()
        del claims["revoked"]
        assert Token.from_claims(claims).revoked is False

    @pytest.mark.parametrize("missing", ["jti", "type", "sub", "iat", "exp"])
    def test_missing_claim(self, missing):
        claims = self._claims()
        del claims[missing]
        with pytest.raises(ValueError, match="Missing claim"):
            Token.from_claims(claims)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "session"},
            {"sub": 7},
            {"iat": "yesterday"},
            {"exp": True},
            {"revoked": "no"},
        ],
    )
    def test_ill_typed_claim(self, overrides):
        with pytest.raises(ValueError):
            Token.from_claims(self._claims(**overrides))
