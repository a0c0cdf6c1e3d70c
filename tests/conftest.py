"""Test fixtures — a fresh SQLite database per test, real auth tokens.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite file under tmp_path, with the schema
   created straight from the models. A file (not :memory:) because the
   dashboard opens several sessions at once and they all need to see the
   same committed rows.
2. get_db and get_session_factory are overridden to point at that file.
3. Auth is NOT overridden. Test users are inserted directly and clients
   carry a real signed session token, so every request goes through the
   request gate exactly as in production.
"""

import os
import tempfile

# Settings are read at import time; point them at SQLite before the app loads.
_BOOT_DIR = tempfile.mkdtemp(prefix="clientdesk-test-")
os.environ.setdefault("CLIENTDESK_DATABASE_URL", f"sqlite+aiosqlite:///{_BOOT_DIR}/boot.db")
os.environ.setdefault("CLIENTDESK_ENVIRONMENT", "test")
os.environ.setdefault("CLIENTDESK_JWT_SECRET", "test-secret-that-is-long-enough-for-hs256")

import uuid  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from clientdesk.auth.jwt import create_session_token  # noqa: E402
from clientdesk.auth.password import hash_password  # noqa: E402
from clientdesk.db.engine import build_engine, get_db, get_session_factory  # noqa: E402
from clientdesk.db.models import Base, User  # noqa: E402
from clientdesk.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"

# One hash for every fixture user; bcrypt is deliberately slow.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture()
async def session_factory(tmp_path):
    """Per-test database file with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Direct session for seeding rows and inspecting the database."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the database overridden and no credentials."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """Factory: insert a user and return it."""

    async def _make(email: str | None = None, name: str = "Test User") -> User:
        async with session_factory() as session:
            user = User(
                email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
                name=name,
                password_hash=_PASSWORD_HASH,
            )
            session.add(user)
            await session.commit()
            return user

    return _make


@pytest.fixture
def user_password():
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD


@pytest_asyncio.fixture()
async def user(make_user):
    return await make_user(email="freelancer@example.com", name="Fran Lancer")


@pytest_asyncio.fixture()
async def other_user(make_user):
    return await make_user(email="someone-else@example.com", name="Other Person")


@pytest_asyncio.fixture()
async def auth_client(client, user):
    """HTTP client authenticated as ``user``."""
    transport = ASGITransport(app=app)
    headers = {"Authorization": f"Bearer {create_session_token(user.id)}"}
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as ac:
        yield ac


@pytest_asyncio.fixture()
async def other_client(client, other_user):
    """HTTP client authenticated as ``other_user``."""
    transport = ASGITransport(app=app)
    headers = {"Authorization": f"Bearer {create_session_token(other_user.id)}"}
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as ac:
        yield ac
