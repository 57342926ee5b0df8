"""
Database engine construction and session management
"""
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


def _get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


def _enable_wal(dbapi_connection, connection_record):
    # Readers are not blocked by the writer and committed data survives crashes
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a SQLite file, with WAL enabled per connection"""
    engine = create_async_engine(_get_async_url(url), echo=echo, future=True)
    event.listen(engine.sync_engine, "connect", _enable_wal)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create tables that do not exist yet"""
    # Register models on the metadata
    import inventory.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
