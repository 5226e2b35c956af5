"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("TMDB_API_KEY", "test-tmdb-token")

from movie_shelf.config import get_settings
from movie_shelf.main import app


def make_token(claims: dict, expires_in: timedelta = timedelta(minutes=30)) -> str:
    """Sign claims the way the identity provider does."""
    settings = get_settings()
    payload = {**claims, "exp": datetime.now(UTC) + expires_in}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header carrying a valid token for profile "user-1"."""
    token = make_token({"sub": "user-1", "email": "test@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token_factory():
    """Sign arbitrary claims, for tests of rejected tokens."""
    return make_token
