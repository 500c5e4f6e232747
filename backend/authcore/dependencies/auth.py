"""
Authentication dependencies for route protection.

Protected routes read a bearer access token from the ``Authorization``
header and receive a typed Identity; the same identity is stored on
``request.state.identity`` for anything else handling the request.
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from authcore.core.errors import AuthError, UnauthorizedError
from authcore.dependencies.services import get_auth_service
from authcore.models.account import Identity
from authcore.services.auth_service import AuthService

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "bearer"


class RequestAuthenticator:
    """
    Resolves the caller of a request from its bearer token.

    The token must verify, and the account it names must still exist and be
    active. Tokens are not checked against any revocation list.
    """

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service

    @staticmethod
    def extract_bearer_token(request: Request) -> str:
        """
        Extract the token from ``Authorization: Bearer <token>``.

        Raises:
            UnauthorizedError: If the header is missing or not exactly two
                space-separated parts with a case-insensitive ``Bearer`` scheme
        """
        header = request.headers.get(AUTHORIZATION_HEADER)
        if not header:
            raise UnauthorizedError("Authorization header required")

        parts = header.split(" ")
        if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
            raise UnauthorizedError("Invalid authorization header format")

        return parts[1]

    async def authenticate(self, request: Request) -> Identity:
        """
        Authenticate a request that requires a caller.

        Returns:
            The caller's Identity, also set on ``request.state.identity``

        Raises:
            UnauthorizedError: On a missing or malformed header, an invalid or
                expired token, or an unknown or inactive account
        """
        token = self.extract_bearer_token(request)

        try:
            claims = self.auth_service.verify_access_token(token)
        except AuthError as e:
            raise UnauthorizedError("Invalid or expired token") from e

        account = await self.auth_service.credentials.find_by_id(claims.user_id)
        if account is None or not account.is_active:
            raise UnauthorizedError("User not found or inactive")

        identity = Identity(user_id=account.id, account=account)
        request.state.identity = identity
        return identity

    async def authenticate_optional(self, request: Request) -> Optional[Identity]:
        """
        Authenticate when a caller may be anonymous.

        Any authentication failure yields None; store failures still propagate.
        """
        try:
            return await self.authenticate(request)
        except AuthError as e:
            logger.debug(f"Treating request as anonymous: {e.message}")
            request.state.identity = None
            return None


def get_request_authenticator(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> RequestAuthenticator:
    return RequestAuthenticator(auth_service)


async def get_current_identity(
    request: Request,
    authenticator: Annotated[RequestAuthenticator, Depends(get_request_authenticator)],
) -> Identity:
    """
    Dependency to get the authenticated caller.

    Raises:
        UnauthorizedError 401: If the request cannot be authenticated
    """
    return await authenticator.authenticate(request)


async def get_optional_identity(
    request: Request,
    authenticator: Annotated[RequestAuthenticator, Depends(get_request_authenticator)],
) -> Optional[Identity]:
    """Dependency to get the caller if the request carries a valid token."""
    return await authenticator.authenticate_optional(request)


# Type aliases for cleaner route signatures
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentity = Annotated[Optional[Identity], Depends(get_optional_identity)]
