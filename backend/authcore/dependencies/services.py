"""
Service wiring for dependency injection in routes.

Each request gets stores bound to the shared MongoDB and Redis clients.
Tests replace these through ``app.dependency_overrides``.
"""
from typing import Annotated

from fastapi import Depends

from authcore.config import Settings, get_settings
from authcore.core.security import TokenIssuer
from authcore.database.connections import get_mongo_client, get_redis_client
from authcore.database.databases import auth_db
from authcore.services.auth_service import AuthService
from authcore.stores.credential_store import CredentialStore, MongoCredentialStore
from authcore.stores.session_store import RedisSessionStore, SessionStore


async def get_credential_store() -> CredentialStore:
    """Dependency to get the MongoDB-backed credential store."""
    client = await get_mongo_client()
    return MongoCredentialStore(client[auth_db.DB_NAME])


async def get_session_store() -> SessionStore:
    """Dependency to get the Redis-backed session store."""
    redis = await get_redis_client()
    return RedisSessionStore(redis)


def get_token_issuer(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenIssuer:
    return TokenIssuer(settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def get_auth_service(
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(credentials, sessions, tokens, settings.auth_config())
