"""Database models."""

from app.models.base import metadata
from app.models.oauth_accounts import oauth_accounts
from app.models.refresh_tokens import refresh_tokens
from app.models.users import users

# Every table the migration tool and the runtime handle know about.
tables = (users, oauth_accounts, refresh_tokens)

__all__ = [
    "metadata",
    "oauth_accounts",
    "refresh_tokens",
    "tables",
    "users",
]
