"""Refresh token model definition using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, ForeignKey, Table, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from app.models.base import created_at_column, metadata
from app.models.users import users

refresh_tokens = Table(
    "refresh_tokens",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey(users.c.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # SHA-256 of the issued secret; the secret itself is never stored
    Column("hashed_token", Text, nullable=False, index=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    created_at_column(),
    Column("revoked", Boolean, nullable=False, server_default=text("false")),
    # Rotation chain: points at the token this one was exchanged for
    Column("replaced_by", UUID(as_uuid=True), ForeignKey("refresh_tokens.id"), nullable=True),
)
