"""
Base configurations and mixins for database models.

Provides the declarative base and the id/timestamp mixins shared by
``Usuario`` and ``Observacao``. Column types are kept portable so the
same models run on PostgreSQL and SQLite.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


# Create the base class for all models
Base = declarative_base()


class TimestampMixin:
    """
    Adds created_at/updated_at columns.

    Values are produced on the Python side so that they keep sub-second
    precision on every backend; ``created_at`` doubles as the storage order.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class StringIDMixin:
    """String primary key generated from uuid4 at creation."""

    id = Column(
        String(32),
        primary_key=True,
        default=generate_id,
        comment="Primary key, uuid4 hex",
    )


__all__ = ["Base", "TimestampMixin", "StringIDMixin", "generate_id", "utcnow"]
