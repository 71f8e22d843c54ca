"""Pytest configuration and fixtures."""

import os

# Test database URL (in-memory SQLite unless a real database is provided).
# Must be set before config is imported so the app engine never needs a server.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import models  # noqa: E402,F401
from api.deps import get_db, get_token_secret  # noqa: E402
from auth.admin_token import issue_admin_token  # noqa: E402
from db import Base  # noqa: E402
from main import app  # noqa: E402
from models.admin import Admin  # noqa: E402
from models.division import Division  # noqa: E402
from models.panchayath import Panchayath  # noqa: E402
from models.program import Program  # noqa: E402

TEST_TOKEN_SECRET = "test-service-role-key"


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create a test database session on a fresh schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    if TEST_DATABASE_URL.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    """HTTP client bound to the app, using the test session and token secret."""

    async def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_token_secret] = lambda: TEST_TOKEN_SECRET

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def token_secret():
    return TEST_TOKEN_SECRET


@pytest.fixture
def admin_headers():
    """
    Build x-admin-token headers for an admin record.

    Extra keyword arguments are passed to issue_admin_token.
    """

    def _make(admin: Admin, **kwargs) -> dict:
        kwargs.setdefault("secret", TEST_TOKEN_SECRET)
        kwargs.setdefault("expires_in_hours", 1)
        token = issue_admin_token(
            str(admin.id),
            admin.user_id or "",
            str(admin.division_id),
            **kwargs,
        )
        return {"x-admin-token": token}

    return _make


@pytest_asyncio.fixture
async def division_a(db_session):
    """Create test division A."""
    division = Division(id=uuid4(), name="Division A")
    db_session.add(division)
    await db_session.commit()
    return division


@pytest_asyncio.fixture
async def division_b(db_session):
    """Create test division B."""
    division = Division(id=uuid4(), name="Division B")
    db_session.add(division)
    await db_session.commit()
    return division


@pytest_asyncio.fixture
async def admin_a(db_session, division_a):
    """Create an active admin in Division A."""
    admin = Admin(
        id=uuid4(),
        user_id=str(uuid4()),
        name="Admin A",
        division_id=division_a.id,
        is_active=True,
    )
    db_session.add(admin)
    await db_session.commit()
    return admin


@pytest_asyncio.fixture
async def inactive_admin(db_session, division_a):
    """Create a deactivated admin in Division A."""
    admin = Admin(
        id=uuid4(),
        user_id=str(uuid4()),
        name="Former Admin",
        division_id=division_a.id,
        is_active=False,
    )
    db_session.add(admin)
    await db_session.commit()
    return admin


@pytest_asyncio.fixture
async def program_a(db_session, division_a):
    """Create a program owned by Division A."""
    program = Program(id=uuid4(), division_id=division_a.id, name="Program A")
    db_session.add(program)
    await db_session.commit()
    return program


@pytest_asyncio.fixture
async def program_b(db_session, division_b):
    """Create a program owned by Division B."""
    program = Program(id=uuid4(), division_id=division_b.id, name="Program B")
    db_session.add(program)
    await db_session.commit()
    return program


@pytest_asyncio.fixture
async def panchayath(db_session):
    """Create an active panchayath with five wards."""
    panchayath = Panchayath(id=uuid4(), name="Kodur", ward="5", is_active=True)
    db_session.add(panchayath)
    await db_session.commit()
    return panchayath


@pytest_asyncio.fixture
async def other_panchayath(db_session):
    """Create a second active panchayath without a ward count."""
    panchayath = Panchayath(id=uuid4(), name="Anakkayam", ward=None, is_active=True)
    db_session.add(panchayath)
    await db_session.commit()
    return panchayath
