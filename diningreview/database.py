"""Async SQLAlchemy engine, session factory, and Base declaration."""

from typing import Any, AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from diningreview.config import settings

# Connection execution option naming the SQLite BEGIN mode
# (DEFERRED, IMMEDIATE or EXCLUSIVE) for the next transaction.
SQLITE_BEGIN = "sqlite_begin"


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
    pass


def _is_sqlite_memory(url: str) -> bool:
    parsed = make_url(url)
    return (
        parsed.database in (None, "", ":memory:")
        or parsed.query.get("mode") == "memory"
    )


def _engine_options(url: str) -> dict[str, Any]:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}
    # Seconds a connection waits on another connection's write lock
    connect_args = {"check_same_thread": False, "timeout": settings.sqlite_busy_timeout}
    if _is_sqlite_memory(url):
        # An in-memory database lives inside one connection
        return {"connect_args": connect_args, "poolclass": StaticPool}
    return {"connect_args": connect_args}


def _emit_sqlite_begin(engine: AsyncEngine) -> None:
    """
    Take over BEGIN from the sqlite3 driver, which otherwise defers it to the
    first write. Each transaction then starts with BEGIN <mode>, where the mode
    comes from the SQLITE_BEGIN execution option (DEFERRED when unset).
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        mode = conn.get_execution_options().get(SQLITE_BEGIN, "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


def build_engine(url: str) -> AsyncEngine:
    """Create the async engine for url with the pool and locking it needs."""
    new_engine = create_async_engine(
        url,
        echo=(settings.app_env == "development"),
        **_engine_options(url),
    )
    if new_engine.dialect.name == "sqlite":
        _emit_sqlite_begin(new_engine)
    return new_engine


engine = build_engine(settings.database_url)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: yields an async database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_db_connectivity() -> bool:
    """Return True if a simple SELECT 1 succeeds."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables (idempotent — IF NOT EXISTS)."""
    # Registers every model on Base.metadata
    import diningreview.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
