"""
Test infrastructure for the User Registry API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance; the unique constraints on ``cpf`` and ``email`` behave the same.
- StaticPool makes every session share one connection, because an
  in-memory SQLite database only exists for the connection that made it.
- The app's ``get_db`` dependency is overridden so requests use the test
  session factory.
- Tables are created before each test and dropped after it.
- ``InMemoryUserStore`` satisfies the ``UserStore`` protocol with a dict,
  for service tests that need no database at all.
"""
import itertools
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from user_registry.database import Base, get_db
from user_registry.main import app
from user_registry.middleware import install_query_counter
from user_registry.models import User
from user_registry.schemas import UserCreate

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryUserStore:
    """Dict-backed ``UserStore`` that records every call it receives."""

    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    async def find_all(self):
        self.calls.append("find_all")
        return list(self.rows.values())

    async def find_by_id(self, user_id):
        self.calls.append("find_by_id")
        return self.rows.get(user_id)

    async def find_by_cpf(self, cpf):
        self.calls.append("find_by_cpf")
        return next((u for u in self.rows.values() if u.cpf == cpf), None)

    async def find_by_email(self, email):
        self.calls.append("find_by_email")
        return next((u for u in self.rows.values() if u.email == email), None)

    async def insert(self, data: UserCreate):
        self.calls.append("insert")
        user_id = next(self._ids)
        self.rows[user_id] = User(
            id=user_id,
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        return user_id

    async def remove(self, user_id):
        self.calls.append("remove")
        return 1 if self.rows.pop(user_id, None) is not None else 0


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def candidate() -> UserCreate:
    return UserCreate(name="Ana Souza", cpf="111", email="a@x.com", phone="11999990000")
