from __future__ import annotations

from datetime import datetime
from typing import Protocol

from chatapp.services.auth.tokens import Token


class TokenRegistry(Protocol):
    """
    Authoritative store of issued tokens keyed by id.

    Implementations MUST make ``put``/``get``/``revoke`` linearizable across
    threads and MUST hand out whole records only.
    """

    def put(self, token: Token) -> None:
        """Insert or overwrite the entry for ``token.id``."""

    def get(self, token_id: str) -> Token | None:
        """Return the canonical record, or ``None`` when unknown."""

    def revoke(self, token_id: str) -> Token:
        """
        Replace the entry with its revoked copy and return it.

        :raises NotFoundError: If ``token_id`` is unknown. Nothing is mutated.
        """

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop entries whose ``expires_at <= now``. :returns: Number removed."""
