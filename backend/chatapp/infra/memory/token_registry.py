"""Process-local token registry."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime

from chatapp.services._shared.errors import NotFoundError
from chatapp.services._shared.ports import TokenRegistry
from chatapp.services.auth.tokens import Token

log = logging.getLogger(__name__)


class InMemoryTokenRegistry(TokenRegistry):
    """
    Dictionary of token records guarded by a single lock.

    Records are immutable, so revocation swaps the entry for a revoked copy
    and readers always observe a whole record.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, Token] = {}
        self._lock = threading.Lock()

    def put(self, token: Token) -> None:
        with self._lock:
            self._by_id[token.id] = token

    def get(self, token_id: str) -> Token | None:
        with self._lock:
            return self._by_id.get(token_id)

    def revoke(self, token_id: str) -> Token:
        with self._lock:
            current = self._by_id.get(token_id)
            if current is None:
                raise NotFoundError("Token", token_id)
            if current.revoked:
                return current
            revoked = current.as_revoked()
            self._by_id[token_id] = revoked
        log.info("Token revoked", extra={"event": "token.revoked", "token_id": token_id})
        return revoked

    def purge_expired(self, now: datetime | None = None) -> int:
        moment = now or datetime.now(UTC)
        with self._lock:
            expired = [tid for tid, tok in self._by_id.items() if tok.is_expired(moment)]
            for tid in expired:
                del self._by_id[tid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def __contains__(self, token_id: object) -> bool:
        with self._lock:
            return token_id in self._by_id
