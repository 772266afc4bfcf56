from __future__ import annotations

import threading
from typing import Protocol


class Credentialed(Protocol):
    """Minimal view of an account the login flow needs."""

    id: int
    name: str
    email: str

    @property
    def subject(self) -> str: ...

    def verify_password(self, raw: str) -> bool: ...


class UserLookup(Protocol):
    """Port resolving a login email to an account."""

    def get_by_email(self, email: str) -> Credentialed | None: ...


class InMemoryUserLookup(UserLookup):
    """Dictionary-backed lookup used by unit tests and concurrency checks."""

    def __init__(self, users: list[Credentialed] | None = None) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, Credentialed] = {}
        for user in users or []:
            self.add(user)

    def add(self, user: Credentialed) -> None:
        with self._lock:
            self._by_email[user.email.strip().lower()] = user

    def get_by_email(self, email: str) -> Credentialed | None:
        with self._lock:
            return self._by_email.get(email.strip().lower())
