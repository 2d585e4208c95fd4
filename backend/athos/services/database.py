"""
Database service: SQLite file, schema migrations and async SQLAlchemy sessions
"""

import logging
import os
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from .migration_service import MigrationService

logger = logging.getLogger(__name__)


class DatabaseService:

    def __init__(self, db_path: str = None):
        # Use environment variable if provided, otherwise default to user data
        if db_path is None:
            db_path = os.getenv(
                "DATABASE_PATH",
                os.path.join(os.path.expanduser("~"), ".athos", "athos.db"),
            )
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.database_url = f"sqlite+aiosqlite:///{self.db_path}"

        # Connections are opened per session so sessions may be used from
        # whichever event loop handles the request
        self.engine = create_async_engine(
            self.database_url,
            echo=False,
            future=True,
            poolclass=NullPool,
        )

        self.async_session = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        self._init_db()

    def _init_db(self):
        """Initialize database with migrations"""
        self.migration_service = MigrationService(str(self.db_path))

        if self.migration_service.apply_pending_migrations():
            logger.info("Database migrations applied successfully")
        else:
            logger.error("Failed to apply database migrations")

    def get_migration_status(self):
        return self.migration_service.get_migration_status()


# Global database service instance for dependency injection
# This will be initialized in app startup
_db_service = None


def init_database_service(db_path: str = None) -> DatabaseService:
    """Initialize the global database service instance"""
    global _db_service
    _db_service = DatabaseService(db_path)
    return _db_service


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency function to get database session for FastAPI routes
    """
    if _db_service is None:
        raise RuntimeError(
            "Database service not initialized. Call init_database_service() first."
        )

    async with _db_service.async_session() as session:
        try:
            yield session
        finally:
            await session.close()


__all__ = [
    "DatabaseService",
    "init_database_service",
    "get_db",
]
