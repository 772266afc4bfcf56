"""Authorization rules applied after a token has been authenticated."""

from __future__ import annotations

from chatapp.services._shared.errors import WrongTokenKindError
from chatapp.services.auth.tokens import Token, TokenKind


def ensure_kind(token: Token, required: TokenKind) -> Token:
    """
    Reject ``token`` unless it is of the ``required`` kind.

    :raises WrongTokenKindError: When the kinds differ.
    """
    if token.kind is not required:
        raise WrongTokenKindError()
    return token
