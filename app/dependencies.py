"""FastAPI dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database


def get_database(request: Request) -> Database:
    """Return the connection handle created at startup."""
    return request.app.state.database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a per-request transactional session.

    The transaction commits when the endpoint returns and rolls back if it
    raises.
    """
    async with database.transaction() as session:
        yield session


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
