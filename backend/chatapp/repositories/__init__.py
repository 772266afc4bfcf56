"""Repository package exposing persistence-layer access for the models."""

from __future__ import annotations

from chatapp.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from chatapp.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    "UserRepository",
]
