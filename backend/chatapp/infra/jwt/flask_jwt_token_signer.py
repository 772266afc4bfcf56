# chatapp/infra/jwt/flask_jwt_token_signer.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, PyJWTError

from chatapp.services._shared.errors import (
    TokenExpiredError,
    TokenSigningError,
    TokenVerificationError,
)
from chatapp.services._shared.ports import TokenSigner
from chatapp.services.auth.tokens import Token, TokenKind

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenSigner(TokenSigner):
    """
    Adapter for Flask-JWT-Extended.

    Signs with ``JWT_SECRET_KEY``/``JWT_ALGORITHM`` and only decodes the
    algorithms listed in ``JWT_DECODE_ALGORITHMS``.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def _claims(self, token: Token) -> dict[str, Any]:
        # Overrides win over the library defaults, so the wire copy mirrors
        # the record exactly.
        iat = int(token.issued_at.timestamp())
        return {
            "jti": token.id,
            "iat": iat,
            "nbf": iat,
            "exp": int(token.expires_at.timestamp()),
            "revoked": token.revoked,
        }

    def sign(self, token: Token) -> str:
        create = create_access_token if token.kind is TokenKind.ACCESS else create_refresh_token
        try:
            raw = cast(
                str,
                create(
                    identity=token.subject,
                    additional_claims=self._claims(token),
                    expires_delta=token.expires_at - token.issued_at,
                ),
            )
            # Safety assertion: the library must not overwrite the supplied jti,
            # otherwise the string could never be reconciled with the registry.
            actual = cast(dict[str, Any], decode_token(raw, allow_expired=True))["jti"]
        except (PyJWTError, JWTExtendedException, RuntimeError) as exc:
            log.error(
                "Token signing failed",
                extra={"event": "token.sign_failed", "token_id": token.id},
                exc_info=True,
            )
            raise TokenSigningError("Token could not be signed.") from exc

        if actual != token.id:
            raise TokenSigningError(f"{token.kind.value} token jti mismatch after creation.")
        return raw

    def verify(self, raw: str) -> Token:
        try:
            claims = cast(dict[str, Any], decode_token(raw))
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired.") from exc
        except (PyJWTError, JWTExtendedException) as exc:
            raise TokenVerificationError(str(exc)) from exc

        try:
            return Token.from_claims(claims)
        except ValueError as exc:
            raise TokenVerificationError(str(exc)) from exc
