import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from auth.application.services import register_user
from auth.infrastructure.user_repository import DbUserRepository
from documents.infrastructure.unit_of_work import DbUnitOfWork
from main import app
from shared.dependencies import get_db
from shared.infrastructure.database import Base

import auth.infrastructure.orm_models  # noqa: F401
import documents.infrastructure.models  # noqa: F401


@pytest.fixture
def test_database_url(tmp_path):
    # A file rather than :memory: so that concurrent sessions get their own connections.
    return os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
async def test_engine(test_database_url):
    engine = create_async_engine(test_database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


async def create_user_and_get_headers(client: AsyncClient, suffix: str = "") -> dict:
    """Register a user and return auth headers."""
    await client.post(
        "/api/auth/register",
        json={
            "name": f"Test User{suffix}",
            "email": f"test{suffix}@example.com",
            "password": "secret123",
        },
    )
    resp = await client.post(
        "/api/auth/login",
        json={"email": f"test{suffix}@example.com", "password": "secret123"},
    )
    token = resp.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client) -> dict:
    return await create_user_and_get_headers(client)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(db):
    return DbUnitOfWork(db)


@pytest.fixture
async def user(db):
    return await register_user(
        DbUserRepository(db),
        name="Alice Smith",
        email="alice@example.com",
        password="secret123",
    )


@pytest.fixture(autouse=True)
async def override_db(session_factory):
    async def _override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
