"""
Dependencies for dependency injection in routes.
"""
from authcore.dependencies.auth import (
    CurrentIdentity,
    OptionalIdentity,
    RequestAuthenticator,
    get_current_identity,
    get_optional_identity,
)
from authcore.dependencies.services import (
    get_auth_service,
    get_credential_store,
    get_session_store,
    get_token_issuer,
)

__all__ = [
    "CurrentIdentity",
    "OptionalIdentity",
    "RequestAuthenticator",
    "get_current_identity",
    "get_optional_identity",
    "get_auth_service",
    "get_credential_store",
    "get_session_store",
    "get_token_issuer",
]
