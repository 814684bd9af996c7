"""
Shared fixtures: an in-memory SQLite database per test, a session bound to it,
and an HTTPX client talking to the FastAPI app with ``get_db`` overridden.
"""

from typing import Optional

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from docvault.core.db import get_db
from docvault.db.models import Base
from docvault.main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def register_user(client):
    """Register through the API and return the new user's id."""

    async def _register(
        username: str,
        password: str = "secret-pass",
        email: Optional[str] = None,
        is_admin: bool = False,
        is_active: bool = True,
    ) -> int:
        response = await client.post(
            "/api/users/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
                "fullName": username.title(),
                "isAdmin": is_admin,
                "isActive": is_active,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["userId"]

    return _register


@pytest_asyncio.fixture
async def upload_document(client):
    """Upload through the API and return the parsed response."""

    async def _upload(
        user_id: int,
        file_name: str = "notes.txt",
        content: bytes = b"hello vault",
        content_type: str = "text/plain",
        category: str = "personal",
        description: Optional[str] = None,
    ):
        data = {"userId": str(user_id), "category": category}
        if description is not None:
            data["description"] = description
        return await client.post(
            "/api/documents/upload",
            files={"file": (file_name, content, content_type)},
            data=data,
        )

    return _upload
