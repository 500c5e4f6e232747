"""
Storage capabilities used by the auth service and their backend adapters.
"""
from authcore.stores.credential_store import CredentialStore, MongoCredentialStore
from authcore.stores.session_store import (
    MemorySessionStore,
    RedisSessionStore,
    SessionStore,
    lockout_key,
    refresh_token_key,
)

__all__ = [
    "CredentialStore",
    "MongoCredentialStore",
    "SessionStore",
    "RedisSessionStore",
    "MemorySessionStore",
    "lockout_key",
    "refresh_token_key",
]
