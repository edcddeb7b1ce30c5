"""
Menu API — Shared Model Columns
===============================

What:  Mixin with the integer primary key and the server-assigned timestamps
       every menu table carries.
How:   `created_at` is set once on insert; `updated_at` is refreshed by the
       `onupdate` hook, which SQLAlchemy also applies to Core `update()`
       statements, so partial updates always bump it.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """id + created_at + updated_at, immutable by clients."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
