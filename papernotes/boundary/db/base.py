"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (creation timestamp, UUIDs).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class so they're registered
    with the metadata and included in table creation.
    """

    pass


class UUIDMixin:
    """
    Mixin providing UUID primary key to all models.

    Generates UUID v4 automatically on row creation. Stored as native UUID
    on PostgreSQL and as CHAR(32) elsewhere.

    Attributes:
        id: UUID v4 primary key, auto-generated on insert
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing a creation timestamp.

    Rows written by the pipeline are insert-only, so there is no updated_at.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
