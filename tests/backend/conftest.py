"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing
FastAPI routes and authenticated requests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Request Helpers
# =============================================================================

@pytest.fixture
def auth_headers():
    """
    Build an Authorization header for an access token.

    Usage:
        response = await async_client.get("/api/v1/auth/me", headers=auth_headers(token))
    """
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_request():
    """
    Build a minimal Starlette Request carrying the given headers.

    Used to exercise the RequestAuthenticator without going through routing.
    """
    from starlette.requests import Request

    def _make(headers: dict | None = None) -> Request:
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        return Request({
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": raw_headers,
            "query_string": b"",
        })
    return _make


# =============================================================================
# Auth Service Fixtures
# =============================================================================

@pytest.fixture
def mock_auth_service():
    """
    Create a fully mocked AuthService.

    All store-facing methods are AsyncMock, allowing you to configure return values:

        mock_auth_service.login.return_value = LoginResult(...)
    """
    service = MagicMock()
    service.register = AsyncMock()
    service.login = AsyncMock()
    service.refresh = AsyncMock()
    service.logout = AsyncMock()
    service.get_profile = AsyncMock()
    service.credentials = MagicMock()
    service.credentials.find_by_id = AsyncMock()
    return service


@pytest_asyncio.fixture
async def logged_in(async_client, test_user_data):
    """Register and log in through the API; returns the login response body."""
    await async_client.post("/api/v1/auth/register", json={
        **test_user_data,
        "confirm_password": test_user_data["password"],
    })
    response = await async_client.post("/api/v1/auth/login", json=test_user_data)
    assert response.status_code == 200
    return response.json()
