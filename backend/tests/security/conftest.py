"""
Security test fixtures.

These fixtures enable testing security scenarios like IDOR (Insecure Direct
Object Reference) by creating multiple users and their associated data. Each
client carries a real signed token, so requests go through the same bearer
validation as production traffic.
"""
from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.tokens import TokenIssuer
from models.bookmark import Bookmark
from models.user import User


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A)."""
    user = User(email="user-a@test.com", hash="not-a-real-digest")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B) for IDOR testing."""
    user = User(email="user-b@test.com", hash="not-a-real-digest")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        link="https://user-a-bookmark.example.com/",
        title="User A's Private Bookmark",
        description="This should only be accessible to User A",
    )
    db_session.add(bookmark)
    await db_session.commit()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        link="https://user-b-bookmark.example.com/",
        title="User B's Private Bookmark",
        description="This should only be accessible to User B",
    )
    db_session.add(bookmark)
    await db_session.commit()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
def client_factory(
    app: FastAPI,
    client: AsyncClient,  # noqa: ARG001 - installs the session override
    token_issuer: TokenIssuer,
) -> Callable[[User], AsyncClient]:
    """
    Factory fixture that creates test clients authenticated as a specific user.

    Usage:
        async with client_factory(user_a) as client:
            response = await client.get("/bookmarks/")
    """

    def create_client(user: User) -> AsyncClient:
        token = token_issuer.issue(user.id, user.email).access_token
        return AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers={"Authorization": f"Bearer {token}"},
        )

    return create_client


@pytest.fixture
async def client_as_user_a(
    client_factory: Callable[[User], AsyncClient],
    user_a: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client authenticated as User A."""
    async with client_factory(user_a) as test_client:
        yield test_client


@pytest.fixture
async def client_as_user_b(
    client_factory: Callable[[User], AsyncClient],
    user_b: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client authenticated as User B."""
    async with client_factory(user_b) as test_client:
        yield test_client
