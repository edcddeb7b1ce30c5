"""
Menu API — Database Session Management
======================================

What:  Declarative base, the process-scoped `Database` handle (async engine +
       session factory) and the per-request session dependency.
How:   `create_app()` builds one `Database`, stores it on `app.state`, and the
       lifespan handler disposes it on shutdown. Route handlers receive an
       `AsyncSession` through `Depends(get_db_session)`; nothing in the CRUD
       engine reaches for a module-level engine.
When:  Engine is created with the app; sessions are created per request.

Connection Pooling:
    pool_size / max_overflow come from settings (PostgreSQL).
    SQLite URLs use SQLAlchemy's default pool for the dialect and turn on
    `PRAGMA foreign_keys` on every new connection, so foreign keys are
    enforced the same way the production database enforces them.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from menu_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic and `Database.create_all()`
    use to manage the schema.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """
    `connect` listener for SQLite engines.

    SQLite ships with foreign key enforcement off and the setting is per
    connection, so it has to be switched on for every pooled connection.
    Without it a product could point at a missing category and a referenced
    row could be deleted, unlike on PostgreSQL.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and the session factory for one application.

    Lifecycle:
        init:     Database(settings) — lazy, no connection is opened yet
        use:      `async with database.session() as session: ...`
        teardown: `await database.dispose()` from the lifespan handler
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url

        engine_kwargs: Dict[str, Any] = {
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        if settings.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        """Create any missing tables from the ORM metadata."""
        # Registers every model on Base.metadata
        import menu_api.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Trivial round trip used by the health check."""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1 AS ok"))
            return result.scalar() == 1

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the app's `Database`
        2. Yields it to the route handler
        3. On error: rolls back so no partial write survives
        4. Always: closes the session (returns the connection to the pool)

    Writes are committed by the CRUD service itself, so a failing commit
    surfaces as a 500 response instead of happening after the response.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
