"""
chatapp.services._shared.ports
==============================

Ports (hexagonal interfaces) that keep the service layer independent from
token and account infrastructure.

Modules
-------
- :mod:`token_signer`:
    :class:`~.TokenSigner`, signing and verifying token strings.
- :mod:`token_registry`:
    :class:`~.TokenRegistry`, the authoritative per-process token store.
- :mod:`user_lookup`:
    :class:`~.UserLookup`, resolving a login email to an account.

Concrete adapters live under ``chatapp.infra`` (JWT, in-memory) and
``chatapp.repositories`` (SQLAlchemy).
"""

from __future__ import annotations

from .token_registry import TokenRegistry
from .token_signer import TokenSigner
from .user_lookup import Credentialed, InMemoryUserLookup, UserLookup

__all__ = [
    "TokenSigner",
    "TokenRegistry",
    "UserLookup",
    "Credentialed",
    "InMemoryUserLookup",
]
