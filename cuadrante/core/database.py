"""
SQL backend of the record store: engine, sessions and table creation.

Only used when STORE_BACKEND is "sql". Local installs run on a SQLite file;
its directory is created on import so a fresh checkout starts without setup.
"""
import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from cuadrante.core.config import settings

logger = logging.getLogger(__name__)


def sqlite_path(database_url: str) -> Path | None:
    """File behind a SQLite URL; None for in-memory databases and other dialects."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def engine_options(database_url: str) -> dict:
    options = {"echo": settings.DEBUG and settings.APP_ENV == "development"}
    if make_url(database_url).get_backend_name() == "sqlite":
        # aiosqlite runs the connection in a worker thread
        options["connect_args"] = {"check_same_thread": False}
    return options


_db_file = sqlite_path(settings.DATABASE_URL)
if _db_file is not None:
    _db_file.parent.mkdir(parents=True, exist_ok=True)

engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables():
    """Creates missing tables; existing ones are left as they are (no migrations)."""
    import cuadrante.models  # noqa – registers every model
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
