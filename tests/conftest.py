"""Shared test fixtures for pytest"""
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_hostel.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import models  # noqa: E402,F401
from core.auth import create_user_token, get_password_hash  # noqa: E402
from core.database import Base, configure_sqlite, get_db, get_db_transactional  # noqa: E402
from core.enums import RoomStatus, UserRole  # noqa: E402
from main import app  # noqa: E402
from models.room import Room  # noqa: E402
from models.user import User  # noqa: E402


@pytest.fixture
async def test_engine(tmp_path):
    """Fresh SQLite database per test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    configure_sqlite(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """
    Single session for service and repository tests.

    API tests should not hold this open: its read transaction would keep
    SQLite locked against the request sessions.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client for API testing; every request gets its own session like production"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_db_transactional():
        async with session_factory.begin() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_transactional] = override_get_db_transactional

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(session_factory, **fields) -> User:
    async with session_factory.begin() as session:
        user = User(hashed_password=get_password_hash(fields.pop("password")), **fields)
        session.add(user)
        await session.flush()
        await session.refresh(user)
    return user


@pytest.fixture
async def admin_user(session_factory):
    return await _create_user(
        session_factory,
        name="Admin User",
        email="admin@hostel.com",
        password="admin123",
        role=UserRole.ADMIN.value,
    )


@pytest.fixture
async def staff_user(session_factory):
    return await _create_user(
        session_factory,
        name="Staff User",
        email="staff@hostel.com",
        password="staff1234",
        role=UserRole.STAFF.value,
    )


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_user_token(admin_user)}"}


@pytest.fixture
def staff_headers(staff_user):
    return {"Authorization": f"Bearer {create_user_token(staff_user)}"}


@pytest.fixture
def make_room(db_session):
    """Factory adding rooms through the shared db_session"""

    async def _make_room(
        number: str,
        type: str = "single",
        status: str = RoomStatus.AVAILABLE.value,
        price_per_month: float = 3000,
    ) -> Room:
        room = Room(number=number, type=type, status=status, price_per_month=price_per_month)
        db_session.add(room)
        await db_session.flush()
        await db_session.refresh(room)
        return room

    return _make_room


@pytest.fixture
def make_user(session_factory):
    """Factory committing extra accounts (e.g. legacy role labels)"""

    async def _make_user(**fields) -> User:
        return await _create_user(session_factory, **fields)

    return _make_user
