"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata, timestamp_columns

USER_ROLES = ("doctor", "patient", "admin")
DEFAULT_USER_ROLE = "doctor"

EMAIL_MAX_LENGTH = 255

users = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(EMAIL_MAX_LENGTH), nullable=False),
    # NULL for accounts that only sign in through an OAuth provider
    Column("hashed_password", Text),
    Column("email_verified", Boolean, nullable=False, server_default=text("false")),
    Column(
        "role",
        String(20),
        nullable=False,
        server_default=text(f"'{DEFAULT_USER_ROLE}'"),
    ),
    *timestamp_columns(),
    UniqueConstraint("email", name="users_email_unique"),
    CheckConstraint(
        "role IN ({})".format(", ".join(f"'{role}'" for role in USER_ROLES)),
        name="role_check",
    ),
    Index("unique_email_index", "email", unique=True),
)
