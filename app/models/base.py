"""Shared metadata and reusable timestamp columns."""

from datetime import UTC, datetime

from sqlalchemy import Column, MetaData, text
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Constraint names declared explicitly on a table take precedence.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "%(table_name)s_%(column_0_name)s_unique",
    "fk": "%(table_name)s_%(column_0_name)s_%(referred_table_name)s_%(referred_column_0_name)s_fk",
    "pk": "%(table_name)s_pkey",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def created_at_column() -> Column:
    """Non-null creation timestamp, set by the database at insert."""
    return Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )


def updated_at_column() -> Column:
    """
    Modification timestamp maintained by the application.

    SQLAlchemy fills it on insert and recomputes it on every UPDATE issued
    through Core, unless the statement sets it explicitly.
    """
    return Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=True,
        default=utcnow,
        onupdate=utcnow,
    )


def timestamp_columns() -> list[Column]:
    """created_at plus updated_at, for tables with mutable rows."""
    return [created_at_column(), updated_at_column()]
