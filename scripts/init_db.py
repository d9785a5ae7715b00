"""Create the schema directly from the table definitions, bypassing Alembic."""

import asyncio

import structlog

from app.config import settings
from app.database import Database
from app.middleware.logging import configure_logging

logger = structlog.get_logger()


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    database = Database.from_settings(settings)
    try:
        await database.create_all()
        logger.info("database_initialized", tables=sorted(database.metadata.tables))
    finally:
        await database.dispose()


if __name__ == "__main__":
    configure_logging(settings)
    asyncio.run(init_db())
