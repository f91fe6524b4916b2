"""
Shared pytest fixtures for the Cuadrante backend tests.

Uses SQLite in-memory with StaticPool so all sessions share one connection,
meaning data written in one session is visible to others (important for HTTP client tests).
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import cuadrante.models  # noqa – registers all SQLAlchemy models with Base.metadata
from cuadrante.api.deps import get_file_storage
from cuadrante.core.database import Base, get_db
from cuadrante.main import app
from cuadrante.services.file_storage import LocalFileStorage
from cuadrante.store import EMPLOYEES, EXTRAS, JsonRecordStore, SqlRecordStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

LOCATION = "Brutal Soul"
OTHER_LOCATION = "Stella Brutal"


# ── Shared engine (function-scoped: fresh DB per test) ───────────────────────

@pytest_asyncio.fixture
async def engine():
    """Creates a fresh in-memory SQLite engine per test with a shared connection pool."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,          # single shared connection → all sessions see same data
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine) -> AsyncSession:
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# ── Record stores ─────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def store(db) -> SqlRecordStore:
    return SqlRecordStore(db)


@pytest.fixture
def json_store(tmp_path) -> JsonRecordStore:
    return JsonRecordStore(tmp_path / "data")


@pytest_asyncio.fixture(params=["sql", "json"])
async def any_store(request, db, tmp_path):
    """Runs the test once per backend."""
    if request.param == "json":
        return JsonRecordStore(tmp_path / "data")
    return SqlRecordStore(db)


@pytest.fixture
def files(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(tmp_path / "media", "/media")


# ── HTTP client fixture ───────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(engine, files) -> AsyncClient:
    """
    FastAPI test client with get_db overridden to use the test engine and
    uploads going to a temporary media directory.
    """
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: files

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


# ── Helpers ───────────────────────────────────────────────────────────────────

async def add_employee(store, name: str, role: str | None = "Camarero", location: str = LOCATION, **extra) -> dict:
    return await store.create(EMPLOYEES, {"name": name, "role": role, "location": location, **extra})


async def add_extra(store, name: str, role: str | None = "Camarero", location: str = LOCATION, **extra) -> dict:
    return await store.create(EXTRAS, {"name": name, "role": role, "location": location, **extra})
