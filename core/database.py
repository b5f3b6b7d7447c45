"""
Relational database connection using SQLAlchemy's asyncio extension.
Includes detailed logging and comprehensive error handling.
"""

from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import Settings, get_settings
from core.logger import logger
from repositories.models import Base


def _enable_case_sensitive_like(dbapi_connection, connection_record) -> None:
    """Make LIKE case-sensitive on each new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


class Database:
    """Async engine and session factory manager."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize database manager; the engine is created on connect()."""
        self.settings = settings or get_settings()
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        logger.debug("Database connection manager initialized")

    def _engine_options(self) -> dict:
        url = self.settings.sqlalchemy_database_url
        options = {"echo": self.settings.db_echo, "pool_pre_ping": True}

        if self.settings.is_sqlite:
            options["connect_args"] = {"check_same_thread": False}
            # In-memory SQLite lives inside a single connection
            if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
                options["poolclass"] = StaticPool
            return options

        options.update(
            pool_size=self.settings.db_pool_size,
            max_overflow=self.settings.db_max_overflow,
            pool_recycle=self.settings.db_pool_recycle,
        )
        return options

    async def connect(self) -> None:
        """
        Create the engine and session factory.

        Raises:
            Exception: If the engine cannot be created
        """
        if self.engine is not None:
            logger.debug("Database engine already created")
            return

        try:
            logger.info(f"📝 Connecting to database: {self.settings.masked_database_url}")

            self.engine = create_async_engine(
                self.settings.sqlalchemy_database_url, **self._engine_options()
            )
            if self.settings.is_sqlite:
                event.listen(self.engine.sync_engine, "connect", _enable_case_sensitive_like)

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )

            logger.info("✅ Database engine created")

        except Exception as e:
            logger.error(f"❌ Failed to create database engine: {e}")
            logger.exception("Database connection error details:")
            raise

    async def disconnect(self) -> None:
        """
        Dispose of the engine and its connection pool.

        Safe to call even if not connected.
        """
        try:
            if self.engine is not None:
                logger.info("📝 Disconnecting from database...")
                await self.engine.dispose()
                self.engine = None
                self.session_factory = None
                logger.info("✅ Disconnected from database")
            else:
                logger.debug("Database engine not initialized, nothing to disconnect")

        except Exception as e:
            logger.error(f"❌ Error disconnecting from database: {e}")
            logger.exception("Database disconnection error details:")

    async def create_tables(self) -> None:
        """Create all mapped tables that do not exist yet."""
        if self.engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")

        logger.info("📝 Creating database tables...")
        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        logger.info("✅ Database tables created or already present")

    async def drop_tables(self) -> None:
        """Drop all mapped tables."""
        if self.engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.drop_all)
        logger.warning("🗑️ Database tables dropped")

    def session(self) -> AsyncSession:
        """
        Open a new session.

        Raises:
            RuntimeError: If database is not connected
        """
        if self.session_factory is None:
            error_msg = "Database not connected. Call connect() first."
            logger.error(f"❌ {error_msg}")
            raise RuntimeError(error_msg)
        return self.session_factory()

    async def health_check(self) -> bool:
        """
        Check if the database answers a trivial query.

        Returns:
            True if connection is healthy, False otherwise
        """
        try:
            if self.engine is None:
                logger.warning("⚠️ Database engine not initialized")
                return False

            async with self.engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
            logger.debug("✅ Database health check passed")
            return True

        except Exception as e:
            logger.error(f"❌ Database health check failed: {e}")
            return False


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    The session is closed when the request finishes.
    """
    database: Database = request.app.state.database
    session = database.session()
    try:
        yield session
    finally:
        await session.close()
