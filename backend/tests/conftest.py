"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Callable, Coroutine, Generator
from typing import Any

# Settings are read at import time by db.session and api.main, so the environment
# must be populated before any application module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-with-at-least-32-characters")

import pytest
from argon2 import PasswordHasher as Argon2Hasher
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings
from core.security import PasswordHasher
from core.tokens import TokenIssuer
from models.base import Base
from models.user import User

TEST_JWT_SECRET = "test-jwt-secret-with-at-least-32-characters"


@pytest.fixture(scope="session")
def database_url(tmp_path_factory: pytest.TempPathFactory) -> Generator[str]:
    """
    Database URL for the test session.

    Defaults to a SQLite file. Set TEST_POSTGRES=1 to run against a PostgreSQL
    container instead (requires Docker).
    """
    if os.getenv("TEST_POSTGRES"):
        from testcontainers.postgres import PostgresContainer  # noqa: PLC0415

        with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
            yield postgres.get_connection_url()
        return

    db_path = tmp_path_factory.mktemp("db") / "test.db"
    yield f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with a fresh schema for each test."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    """Settings for the application under test, isolated from any local .env."""
    return Settings(
        _env_file=None,
        database_url=database_url,
        jwt_secret=TEST_JWT_SECRET,
    )


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Argon2 hasher with minimal cost parameters to keep tests fast."""
    return PasswordHasher(Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def token_issuer(test_settings: Settings) -> TokenIssuer:
    """Token issuer sharing the application's signing secret."""
    return TokenIssuer.from_settings(test_settings)


@pytest.fixture
def app(test_settings: Settings, password_hasher: PasswordHasher) -> FastAPI:
    """Build an application instance for the test."""
    from api.main import create_app  # noqa: PLC0415

    return create_app(test_settings, password_hasher=password_hasher)


@pytest.fixture
async def client(
    app: FastAPI,
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override."""
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        # Mirror the request-scoped unit of work: commit on success, roll back on error
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(
    db_session: AsyncSession,
    password_hasher: PasswordHasher,
) -> Callable[..., Coroutine[Any, Any, User]]:
    """Factory that inserts a user with a hashed password and returns it."""

    async def _make_user(email: str, password: str = "password123") -> User:
        user = User(email=email, hash=password_hasher.hash(password))
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers(token_issuer: TokenIssuer) -> Callable[[User], dict[str, str]]:
    """Build an Authorization header carrying a valid token for the user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = token_issuer.issue(user.id, user.email).access_token
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
