"""Tiny helpers shared across test modules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

LOGIN_URL = "/api/v1/auth/login"


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header carrying ``token``."""
    return {"Authorization": f"Bearer {token}"}


def login(client, email: str, password: str):
    """POST credentials to the login endpoint and return the response."""
    return client.post(LOGIN_URL, json={"email": email, "password": password})


def forge_claims(**overrides: Any) -> dict[str, Any]:
    """Build a complete, currently valid claim set for hand-made tokens."""
    now = datetime.now(UTC).replace(microsecond=0)
    claims: dict[str, Any] = {
        "jti": "forged",
        "type": "access",
        "sub": "1",
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
        "fresh": False,
        "revoked": False,
    }
    claims.update(overrides)
    return claims


def forge_token(secret: str, *, algorithm: str = "HS256", **claims: Any) -> str:
    """Sign a token with PyJWT directly, bypassing the application signer."""
    return jwt.encode(forge_claims(**claims), secret, algorithm=algorithm)


def unsigned_token(**claims: Any) -> str:
    """Return an ``alg: none`` token with the given claims."""
    return jwt.encode(forge_claims(**claims), None, algorithm="none")
