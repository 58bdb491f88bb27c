"""
Pytest configuration and shared fixtures for the catalog API tests.

Provides an in-memory SQLite database seeded with the demo dataset, an
httpx client bound to the FastAPI app, and access tokens for each role.
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, enable_sqlite_foreign_keys, get_db
from config import settings
from middleware.auth import issue_access_token
from middleware.rate_limit import _limiter

# ── Test Configuration ───────────────────────────────────────────────
# Set test-only values for settings that would normally come from .env
if not settings.jwt_secret:
    settings.jwt_secret = "test-jwt-secret-for-pytest-only"

BCRYPT_TEST_ROUNDS = 4

# Seeded ids (see services/seed_service.py)
CLIENT_USERNAME = "maria@gmail.com"
ADMIN_USERNAME = "alex@gmail.com"
DEMO_PASSWORD = "123456"
EXISTING_PRODUCT_ID = 2
DEPENDENT_PRODUCT_ID = 3
NON_EXISTING_PRODUCT_ID = 100
SEEDED_PRODUCT_COUNT = 25


# ── Database Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    In-memory SQLite database, tables created and demo data seeded.

    Uses StaticPool so every session shares the single in-memory connection.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    from services.seed_service import seed_demo_data
    async with factory() as session:
        await seed_demo_data(session, rounds=BCRYPT_TEST_ROUNDS)
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session on the seeded test database, for direct service calls."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx client for the FastAPI app.

    Overrides get_db so each request gets its own session on the test DB.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    _limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# ── Token Fixtures ───────────────────────────────────────────────────


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token() -> str:
    """Token for Alex Green (user 2, ADMIN)."""
    return issue_access_token(user_id=2, username=ADMIN_USERNAME, role="ADMIN")


@pytest.fixture
def client_token() -> str:
    """Token for Maria Brown (user 1, CLIENT)."""
    return issue_access_token(user_id=1, username=CLIENT_USERNAME, role="CLIENT")


@pytest.fixture
def invalid_token(admin_token) -> str:
    """Admin token with a corrupted signature."""
    return admin_token + "xpto"


# ── Test Data Fixtures ────────────────────────────────────────────────


@pytest.fixture
def product_payload() -> dict:
    """A valid product submission."""
    return {
        "name": "Playstation 5",
        "description": "Lorem ipsum, dolot sit amet consectetur adipiscing elit",
        "price": 3990.90,
        "imgUrl": "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/1-big.jpg",
        "categories": [{"id": 2, "name": "Electronics"}],
    }
