"""Token record shared by the issuer, the registry and the authenticator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any
from uuid import uuid4


class TokenKind(str, Enum):
    """Token kinds, valued like the ``type`` claim flask-jwt-extended writes."""

    ACCESS = "access"
    REFRESH = "refresh"


def utcnow() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


def new_token_id() -> str:
    """Generate a random, collision-resistant token identifier."""
    return uuid4().hex


@dataclass(frozen=True, slots=True)
class Token:
    """
    Immutable token record.

    The registry copy is authoritative for ``revoked``; the copy decoded from
    the wire only carries the claims that were signed at issuance.

    :ivar id: Unique identifier, carried as the ``jti`` claim.
    :ivar kind: Access or refresh, carried as the ``type`` claim.
    :ivar subject: User identifier, carried as ``sub``.
    :ivar issued_at: Aware UTC datetime, carried as ``iat``.
    :ivar expires_at: Aware UTC datetime, carried as ``exp``.
    :ivar revoked: Revocation flag.
    """

    id: str
    kind: TokenKind
    subject: str
    issued_at: datetime
    expires_at: datetime
    revoked: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Token id must be a non-empty string.")
        if not isinstance(self.subject, str) or not self.subject:
            raise ValueError("Token subject must be a non-empty string.")
        if not isinstance(self.kind, TokenKind):
            raise ValueError(f"Unknown token kind: {self.kind!r}")
        for name in ("issued_at", "expires_at"):
            value = getattr(self, name)
            if not isinstance(value, datetime) or value.tzinfo is None:
                raise ValueError(f"Token {name} must be a timezone-aware datetime.")
        if self.expires_at <= self.issued_at:
            raise ValueError("Token expires_at must be after issued_at.")

    @classmethod
    def issue(
        cls,
        *,
        kind: TokenKind,
        subject: str,
        lifetime: timedelta,
        now: datetime | None = None,
    ) -> Token:
        """Build a fresh, unrevoked token with a new id."""
        issued_at = (now or utcnow()).replace(microsecond=0)
        return cls(
            id=new_token_id(),
            kind=kind,
            subject=subject,
            issued_at=issued_at,
            expires_at=issued_at + lifetime,
        )

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> Token:
        """
        Build a token from decoded JWT claims.

        :raises ValueError: If a claim is missing or ill-typed.
        """
        try:
            jti = claims["jti"]
            kind = TokenKind(claims["type"])
            subject = claims["sub"]
            iat = claims["iat"]
            exp = claims["exp"]
        except KeyError as exc:
            raise ValueError(f"Missing claim: {exc.args[0]}") from exc

        revoked = claims.get("revoked", False)
        if not isinstance(revoked, bool):
            raise ValueError("Claim 'revoked' must be a boolean.")
        for name, value in (("iat", iat), ("exp", exp)):
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ValueError(f"Claim '{name}' must be a numeric timestamp.")

        return cls(
            id=jti,
            kind=kind,
            subject=subject,
            issued_at=datetime.fromtimestamp(int(iat), UTC),
            expires_at=datetime.fromtimestamp(int(exp), UTC),
            revoked=revoked,
        )

    def as_revoked(self) -> Token:
        """Return a revoked copy of this record."""
        return replace(self, revoked=True)

    def is_active(self, now: datetime | None = None) -> bool:
        """``True`` while ``issued_at <= now < expires_at``."""
        moment = now or datetime.now(UTC)
        return self.issued_at <= moment < self.expires_at

    def is_expired(self, now: datetime | None = None) -> bool:
        """``True`` once ``now`` reaches ``expires_at``; the registry purges these."""
        return (now or datetime.now(UTC)) >= self.expires_at
