"""OAuth account model definition using SQLAlchemy Core."""

from sqlalchemy import BigInteger, Column, ForeignKey, String, Table, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import created_at_column, metadata
from app.models.users import users

oauth_accounts = Table(
    "oauth_accounts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey(users.c.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("provider", String(50), nullable=False),
    # One external identity maps to at most one local account
    Column("provider_user_id", String(255), nullable=False),
    Column("access_token", Text),
    Column("refresh_token", Text),
    # Epoch seconds as reported by the provider
    Column("expires_at", BigInteger),
    created_at_column(),
    UniqueConstraint("provider_user_id", name="oauth_accounts_provider_user_id_unique"),
)
