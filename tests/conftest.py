"""
Shared fixtures.

Each test gets its own SQLite file under tmp_path, a fast bcrypt cost and a
token service with a fixed signing key, wired in through FastAPI dependency
overrides. No external services are touched.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.deps import get_password_hasher, get_token_service
from app.core.auth import AuthService
from app.core.database import Base, get_async_session
from app.core.security import PasswordHasher, TokenService
from app.main import app

TEST_SECRET = "unit-test-signing-key"


@pytest.fixture
def hasher():
    # bcrypt's minimum cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(secret_key=TEST_SECRET, algorithm="HS256", expires_delta=timedelta(minutes=30))


@pytest.fixture
async def engine(tmp_path):
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth_service(db, hasher, tokens):
    return AuthService(db, hasher, tokens)


@pytest.fixture
async def client(session_factory, hasher, tokens):
    async def override_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_service] = lambda: tokens

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def register_and_login(client: AsyncClient, username: str, password: str = "pass123") -> dict:
    """Register a user and return {"id", "username", "token", "headers"}."""
    response = await client.post("/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    user = response.json()

    response = await client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]

    return {
        "id": user["id"],
        "username": user["username"],
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
async def alice(client):
    return await register_and_login(client, "alice")


@pytest.fixture
async def bob(client):
    return await register_and_login(client, "bob", "bobpass")
