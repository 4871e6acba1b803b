import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Optional overrides for local test runs
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path)

# Settings require a DATABASE_URL; the engine is created lazily and never used
# by tests, which run against their own in-memory database.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.db.base import Base
from libs.db.session import get_async_db

# Import models so metadata includes every table
from services.storefront_service import models as _storefront_models  # noqa: F401
from services.storefront_service.app.main import create_app
from services.storefront_service.cart.persistence import InMemoryKeyValueStore

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same data.
    """
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
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def cart_storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def app(cart_storage):
    return create_app(cart_storage=cart_storage)


@pytest_asyncio.fixture
async def client(app, db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient with the app and overridden DB dependency.
    """
    app.dependency_overrides[get_async_db] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_user() -> AuthUser:
    return AuthUser(
        user_id="admin-user",
        email="admin@example.com",
        app_metadata={"role": "admin"},
    )


@pytest.fixture
def master_user() -> AuthUser:
    return AuthUser(
        user_id="master-user",
        email="master@example.com",
        app_metadata={"role": "master"},
    )


@pytest.fixture
def as_user(app):
    """Authenticate subsequent requests as the given user."""

    def _as_user(user: AuthUser) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _as_user


@pytest_asyncio.fixture
async def admin_client(client, as_user, admin_user) -> AsyncClient:
    as_user(admin_user)
    return client


@pytest.fixture
def auth_headers() -> dict:
    """
    Bearer header carrying an admin token signed with the configured secret.
    """
    token = jwt.encode(
        {
            "sub": "admin-user",
            "email": "admin@example.com",
            "role": "authenticated",
            "app_metadata": {"role": "admin"},
        },
        settings.SUPABASE_JWT_SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}
