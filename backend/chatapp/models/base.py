"""Declarative mixins and table options shared by the account models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Final

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

# Primary keys double as token subjects, so they must never be handed out
# twice. PostgreSQL sequences already behave this way; SQLite needs
# AUTOINCREMENT or it reuses the id of the last deleted row.
NON_REUSABLE_IDS: Final[dict[str, Any]] = {"sqlite_autoincrement": True}


class TimestampMixin:
    """``created_at`` / ``updated_at`` columns maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class PKMixin:
    """
    Integer surrogate key that also names the row in issued tokens.

    Tables using this mixin should pass :data:`NON_REUSABLE_IDS` in their
    ``__table_args__``.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    @property
    def subject(self) -> str:
        """Token ``sub`` claim for this row (the stringified primary key)."""
        return str(self.id)


class ReprMixin:
    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
