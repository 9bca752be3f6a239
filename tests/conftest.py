"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("OWNER_OPEN_ID", "owner-open-id")

from label_cms.database import create_tables, get_db
from label_cms.main import app
from label_cms.models.user import User, UserRole
from label_cms.utils.security import get_current_principal
from label_cms.utils.timestamps import utcnow


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting test data."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


async def _add_user(session: AsyncSession, open_id: str, role: UserRole) -> User:
    now = utcnow()
    user = User(
        open_id=open_id,
        name=f"{role.value} user",
        role=role,
        created_at=now,
        updated_at=now,
        last_signed_in=now,
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Stored user with the admin role."""
    return await _add_user(db_session, "admin-open-id", UserRole.ADMIN)


@pytest.fixture
async def regular_user(db_session: AsyncSession) -> User:
    """Stored user with the plain user role."""
    return await _add_user(db_session, "user-open-id", UserRole.USER)


@pytest.fixture
def act_as() -> Callable[[User | None], None]:
    """Make subsequent requests run as the given principal (None = anonymous)."""

    def _act_as(user: User | None) -> None:
        app.dependency_overrides[get_current_principal] = lambda: user

    return _act_as
