"""
Global test fixtures for authcore.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Mock Redis (fakeredis)
- Auth policy, stores, token issuer and service wired together
- Test user data
"""

import sys
from datetime import timedelta
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

TEST_SECRET = "test-secret-key"


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database with the indexes the app creates."""
    from authcore.database.registry import create_indexes

    await create_indexes(mock_async_mongo_client)
    yield mock_async_mongo_client["auth_db"]


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_redis():
    """
    Create an async mock Redis client using fakeredis.
    """
    try:
        import fakeredis.aioredis
        redis_client = fakeredis.aioredis.FakeRedis(decode_responses=True)
        yield redis_client
        await redis_client.flushall()
        await redis_client.aclose()
    except ImportError:
        pytest.skip("fakeredis with aioredis not installed")


# =============================================================================
# Auth Fixtures
# =============================================================================

@pytest.fixture
def auth_config():
    """Auth policy with the default lifetimes and lockout threshold."""
    from authcore.config import AuthConfig

    return AuthConfig(
        secret=TEST_SECRET,
        issuer="aogeri-api",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
        max_login_attempts=5,
        lockout_duration=timedelta(minutes=15),
    )


@pytest.fixture
def token_issuer():
    from authcore.core.security import TokenIssuer

    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def credential_store(mock_auth_db):
    from authcore.stores.credential_store import MongoCredentialStore

    return MongoCredentialStore(mock_auth_db)


@pytest.fixture
def session_store(mock_async_redis):
    from authcore.stores.session_store import RedisSessionStore

    return RedisSessionStore(mock_async_redis)


@pytest.fixture
def auth_service(credential_store, session_store, token_issuer, auth_config):
    """AuthService over mongomock and fakeredis."""
    from authcore.services.auth_service import AuthService

    return AuthService(credential_store, session_store, token_issuer, auth_config)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "email": "testuser@example.com",
        "password": "SecurePassword123!"
    }


@pytest_asyncio.fixture
async def registered_user(auth_service, test_user_data):
    """An account registered through the service."""
    return await auth_service.register(
        test_user_data["email"],
        test_user_data["password"],
    )


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    from authcore.config import Settings

    return Settings(
        jwt_secret_key=TEST_SECRET,
        _env_file=None,
    )


@pytest.fixture
def app(
    test_settings,
    credential_store,
    session_store,
    mock_async_mongo_client,
    mock_async_redis,
):
    """
    The FastAPI app with stores and settings overridden.

    The lifespan is not run, so no real connection is ever opened.
    """
    from authcore.config import get_settings
    from authcore.database.connections import get_mongo_client, get_redis_client
    from authcore.dependencies.services import get_credential_store, get_session_store
    from authcore.main import app

    async def _credential_store():
        return credential_store

    async def _session_store():
        return session_store

    async def _mongo_client():
        return mock_async_mongo_client

    async def _redis_client():
        return mock_async_redis

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_credential_store] = _credential_store
    app.dependency_overrides[get_session_store] = _session_store
    app.dependency_overrides[get_mongo_client] = _mongo_client
    app.dependency_overrides[get_redis_client] = _redis_client
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.

    Use this for testing async endpoints.
    """
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
