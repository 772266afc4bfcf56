from __future__ import annotations

from typing import Protocol

from chatapp.services.auth.tokens import Token


class TokenSigner(Protocol):
    """Port for turning token records into signed strings and back."""

    def sign(self, token: Token) -> str:
        """
        Encode and sign ``token``.

        :raises TokenSigningError: If the token cannot be encoded.
        """

    def verify(self, raw: str) -> Token:
        """
        Verify the signature of ``raw`` and decode its claims.

        :raises TokenExpiredError: If the signature is valid but ``exp`` has passed.
        :raises TokenVerificationError: For any other decoding failure.
        """
