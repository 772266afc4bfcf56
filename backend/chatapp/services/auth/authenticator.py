"""Validation pipeline every protected request goes through."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from chatapp.services._shared.errors import (
    AuthenticationError,
    AuthFailure,
    TokenExpiredError,
    TokenVerificationError,
)
from chatapp.services._shared.ports import TokenRegistry, TokenSigner
from chatapp.services.auth.tokens import Token

log = logging.getLogger(__name__)

DEFAULT_HEADER_TYPE = "Bearer"


@dataclass(frozen=True, slots=True)
class AuthenticatedToken:
    """
    Outcome of a successful authentication.

    :ivar token: The registry's canonical record (authoritative for ``revoked``).
    :ivar raw: The token string as presented by the client.
    """

    token: Token
    raw: str


def extract_bearer(header: str | None, header_type: str = DEFAULT_HEADER_TYPE) -> str:
    """
    Return the token from an ``Authorization: <header_type> <token>`` value.

    ``header_type`` mirrors ``JWT_HEADER_TYPE`` and is matched
    case-insensitively. An empty ``header_type`` means the header carries the
    bare token.

    :raises AuthenticationError: ``MISSING_TOKEN`` when the header is absent or
        blank, ``MALFORMED_HEADER`` when it does not have the expected shape.
    """
    if header is None or not header.strip():
        raise AuthenticationError(AuthFailure.MISSING_TOKEN)

    parts = header.split(" ")
    if not header_type:
        if len(parts) != 1:
            raise AuthenticationError(AuthFailure.MALFORMED_HEADER)
        return parts[0]
    if len(parts) != 2 or parts[0].lower() != header_type.lower() or not parts[1]:
        raise AuthenticationError(AuthFailure.MALFORMED_HEADER)
    return parts[1]


class TokenAuthenticator:
    """
    Turn an ``Authorization`` header into an authenticated token.

    The signature is checked before the registry is consulted, and the
    registry copy then decides revocation and the validity window.
    """

    def __init__(
        self,
        *,
        signer: TokenSigner,
        registry: TokenRegistry,
        header_type: str = DEFAULT_HEADER_TYPE,
    ) -> None:
        self.signer = signer
        self.registry = registry
        self.header_type = header_type

    def authenticate(self, header: str | None, *, now: datetime | None = None) -> AuthenticatedToken:
        """
        Run the full pipeline.

        :param header: Raw ``Authorization`` header value (may be ``None``).
        :param now: Reference time; defaults to the current UTC time.
        :returns: The canonical token and the raw string.
        :raises AuthenticationError: With the rejection reason.
        """
        try:
            raw = extract_bearer(header, self.header_type)
            wire = self._verify(raw)

            canonical = self.registry.get(wire.id)
            if canonical is None:
                raise AuthenticationError(AuthFailure.UNKNOWN_TOKEN)
            if canonical.revoked:
                raise AuthenticationError(AuthFailure.REVOKED)
            if not canonical.is_active(now or datetime.now(UTC)):
                raise AuthenticationError(AuthFailure.EXPIRED)
        except AuthenticationError as exc:
            log.warning(
                "Token rejected: %s",
                exc.reason.value,
                extra={"event": "auth.rejected", "reason": exc.reason.value},
            )
            raise

        return AuthenticatedToken(token=canonical, raw=raw)

    def _verify(self, raw: str) -> Token:
        try:
            return self.signer.verify(raw)
        except TokenExpiredError as exc:
            raise AuthenticationError(AuthFailure.EXPIRED) from exc
        except TokenVerificationError as exc:
            raise AuthenticationError(AuthFailure.INVALID_TOKEN) from exc
