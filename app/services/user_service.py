"""User service for business logic."""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash
from app.models.users import users
from app.schemas.users import UserCreate, UserUpdate


class UserService:
    """Service for user operations.

    Methods execute on the session they are given and leave committing to
    the caller, so several calls can share one transaction.
    """

    async def create_user(self, db: AsyncSession, user_data: UserCreate) -> dict:
        """Create a new user."""
        hashed_password = get_password_hash(user_data.password) if user_data.password else None

        query = (
            users.insert()
            .values(
                email=user_data.email,
                hashed_password=hashed_password,
                email_verified=user_data.email_verified,
                role=user_data.role,
            )
            .returning(users)
        )

        result = await db.execute(query)
        user = result.mappings().first()

        if not user:
            raise ValueError("Failed to create user")

        return dict(user)

    async def get_user_by_id(self, db: AsyncSession, user_id: UUID) -> dict | None:
        """Get user by ID."""
        query = select(users).where(users.c.id == user_id)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> dict | None:
        """Get user by email. Matching is case-sensitive."""
        query = select(users).where(users.c.email == email)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def update_user(
        self, db: AsyncSession, user_id: UUID, user_data: UserUpdate
    ) -> dict | None:
        """Update a user. updated_at is refreshed by the table definition."""
        update_data = user_data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_user_by_id(db, user_id)

        query = update(users).where(users.c.id == user_id).values(**update_data).returning(users)

        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> bool:
        """Delete a user along with its OAuth accounts and refresh tokens."""
        query = delete(users).where(users.c.id == user_id)
        result = await db.execute(query)
        return result.rowcount > 0  # type: ignore[attr-defined]
