"""OAuth account service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.oauth_accounts import oauth_accounts
from app.schemas.auth import OAuthAccountCreate


class OAuthAccountService:
    """Service for linked third-party identities."""

    async def link_account(
        self, db: AsyncSession, user_id: UUID, account: OAuthAccountCreate
    ) -> dict:
        """
        Link an external identity to a user.

        Raises:
            IntegrityError: If the provider user ID is already linked or the
                user does not exist
        """
        query = (
            oauth_accounts.insert()
            .values(user_id=user_id, **account.model_dump())
            .returning(oauth_accounts)
        )
        result = await db.execute(query)
        return dict(result.mappings().one())

    async def get_by_provider_user_id(self, db: AsyncSession, provider_user_id: str) -> dict | None:
        """Find the account linked to an external identity."""
        query = select(oauth_accounts).where(oauth_accounts.c.provider_user_id == provider_user_id)
        result = await db.execute(query)
        account = result.mappings().first()
        return dict(account) if account else None

    async def list_for_user(self, db: AsyncSession, user_id: UUID) -> list[dict]:
        """List every account linked to a user."""
        query = (
            select(oauth_accounts)
            .where(oauth_accounts.c.user_id == user_id)
            .order_by(oauth_accounts.c.created_at)
        )
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]
