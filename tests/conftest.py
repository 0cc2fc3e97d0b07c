"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.passwords import BcryptPasswordHasher
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET = "test-secret-key"
DEFAULT_PASSWORD = "123456"

GITHUB_REPOS = [
    {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world"},
    {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife"},
]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables, one per test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_seconds=36000,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Cheapest bcrypt cost so the suite stays fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def github_transport() -> httpx.MockTransport:
    """Fake GitHub: knows ``octocat``, 404s everybody else."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/octocat/repos":
            return httpx.Response(200, json=GITHUB_REPOS)
        return httpx.Response(404, json={"message": "Not Found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    password_hasher: BcryptPasswordHasher,
    github_transport: httpx.MockTransport,
) -> FastAPI:
    """
    Create the application wired to the test database.

    - Services use the in-memory SQLite session factory
    - Tokens are signed with the test secret
    - GitHub calls go to a mock transport
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.github.client import GitHubClient
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    user_service = UserService(
        test_uow_factory,
        auth_provider=auth_provider,
        password_hasher=password_hasher,
    )
    profile_service = ProfileService(
        test_uow_factory,
        github_client=GitHubClient(base_url="https://github.test", transport=github_transport),
    )
    post_service = PostService(test_uow_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


RegisterUser = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register through the API and return ready-to-use auth headers."""

    async def _register(
        name: str, email: str, password: str = DEFAULT_PASSWORD
    ) -> dict[str, str]:
        response = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"x-auth-token": response.json()["token"]}

    return _register


@pytest.fixture
async def alice_headers(register_user: RegisterUser) -> dict[str, str]:
    return await register_user("Alice", "alice@example.com")


@pytest.fixture
async def bob_headers(register_user: RegisterUser) -> dict[str, str]:
    return await register_user("Bob", "bob@example.com")
