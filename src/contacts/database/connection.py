"""
Database connection management
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings, get_async_database_url, settings
from ..logging import get_logger

logger = get_logger(__name__)


class Database:
    """One long-lived async engine plus its session factory.

    Built once at process startup and handed to the repository explicitly;
    requests share it without ever reassigning it.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(
            get_async_database_url(database_url),
            echo=echo,
        )
        self._session_local = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, app_settings: Settings | None = None) -> "Database":
        app_settings = app_settings or settings
        return cls(app_settings.database_url, echo=app_settings.sql_echo)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and rolls back on error."""
        async with self._session_local() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed", database_url=self.database_url)


def create_database(database_url: str | None = None) -> Database:
    """Create the shared database handle from an explicit URL or the settings."""
    if database_url is None:
        database = Database.from_settings()
    else:
        database = Database(database_url, echo=settings.sql_echo)
    logger.info("Database initialized", database_url=database.database_url)
    return database
