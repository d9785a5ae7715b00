"""Refresh token issuing, validation and rotation."""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.core.security import generate_refresh_token, hash_refresh_token
from app.models.refresh_tokens import refresh_tokens

logger = structlog.get_logger()


def is_token_valid(token: Mapping[str, Any], now: datetime | None = None) -> bool:
    """A token is usable only while it is unrevoked and unexpired."""
    if token["revoked"]:
        return False
    if now is None:
        now = datetime.now(UTC)
    return token["expires_at"] > now


class RefreshTokenService:
    """Service for refresh token operations.

    Only the SHA-256 of a token is persisted. Rotation revokes the presented
    token and points its ``replaced_by`` at the newly issued one; run it
    inside ``Database.transaction()`` so both writes land together.
    """

    def __init__(self, ttl: timedelta | None = None):
        """Initialize service with the lifetime of issued tokens."""
        self.ttl = ttl or timedelta(days=settings.refresh_token_expire_days)

    async def issue(self, db: AsyncSession, user_id: UUID) -> tuple[str, dict]:
        """Create a token for a user and return the secret with its record."""
        token = generate_refresh_token()
        query = (
            refresh_tokens.insert()
            .values(
                user_id=user_id,
                hashed_token=hash_refresh_token(token),
                expires_at=datetime.now(UTC) + self.ttl,
            )
            .returning(refresh_tokens)
        )
        result = await db.execute(query)
        return token, dict(result.mappings().one())

    async def get_by_token(
        self, db: AsyncSession, token: str, *, for_update: bool = False
    ) -> dict | None:
        """Look up a token record by its secret, valid or not."""
        query = select(refresh_tokens).where(
            refresh_tokens.c.hashed_token == hash_refresh_token(token)
        )
        if for_update:
            query = query.with_for_update()
        result = await db.execute(query)
        row = result.mappings().first()
        return dict(row) if row else None

    async def find_valid(self, db: AsyncSession, token: str) -> dict | None:
        """Return the token record if the token may still be used."""
        row = await self.get_by_token(db, token)
        if row is None or not is_token_valid(row):
            return None
        return row

    async def rotate(self, db: AsyncSession, token: str) -> tuple[str, dict]:
        """
        Exchange a valid token for a new one.

        Raises:
            UnauthorizedException: If the token is unknown, revoked or expired
        """
        current = await self.get_by_token(db, token, for_update=True)
        if current is None or not is_token_valid(current):
            logger.warning(
                "refresh_token_rejected",
                token_id=str(current["id"]) if current else None,
            )
            raise UnauthorizedException("Invalid refresh token")

        new_token, new_row = await self.issue(db, current["user_id"])

        await db.execute(
            update(refresh_tokens)
            .where(refresh_tokens.c.id == current["id"])
            .values(revoked=True, replaced_by=new_row["id"])
        )

        logger.info(
            "refresh_token_rotated",
            token_id=str(current["id"]),
            replaced_by=str(new_row["id"]),
        )
        return new_token, new_row

    async def revoke(self, db: AsyncSession, token: str) -> bool:
        """Revoke a single token. Returns False if it does not exist."""
        result = await db.execute(
            update(refresh_tokens)
            .where(refresh_tokens.c.hashed_token == hash_refresh_token(token))
            .values(revoked=True)
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def revoke_all_for_user(self, db: AsyncSession, user_id: UUID) -> int:
        """Revoke every outstanding token of a user."""
        result = await db.execute(
            update(refresh_tokens)
            .where(refresh_tokens.c.user_id == user_id, refresh_tokens.c.revoked.is_(False))
            .values(revoked=True)
        )
        return result.rowcount  # type: ignore[attr-defined]
