"""
Authentication router for registration, login, token rotation, and the
current user's account and profile.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from authcore.dependencies.auth import CurrentIdentity, OptionalIdentity
from authcore.dependencies.services import get_auth_service
from authcore.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    TokenPairResponse,
    UserInfoResponse,
)
from authcore.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def not_implemented() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail="not implemented",
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(body: RegisterRequest, auth_service: AuthServiceDep):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique)
    - **password**: At least 8 characters with upper, lower, digit and special character
    - **confirm_password**: Must match password
    - **wallet_address**: Optional
    """
    if not body.passwords_match():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Passwords do not match",
        )

    account = await auth_service.register(
        body.email,
        body.password,
        wallet_address=body.wallet_address or None,
    )
    return RegisterResponse(user_id=account.id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login and get a token pair",
)
async def login(body: LoginRequest, auth_service: AuthServiceDep):
    """
    Authenticate with email and password.

    Pass the access token as `Authorization: Bearer <token>` to protected
    endpoints. After repeated failures the account is locked (423) for a while.
    """
    result = await auth_service.login(body.email, body.password)
    return LoginResponse(
        user=UserInfoResponse.from_account(result.account),
        **result.tokens.model_dump(),
    )


@router.post(
    "/refresh",
    response_model=TokenPairResponse,
    summary="Rotate a refresh token",
)
async def refresh_token(body: RefreshRequest, auth_service: AuthServiceDep):
    """
    Exchange a refresh token for a new token pair.

    The presented refresh token is consumed and cannot be used again.
    """
    tokens = await auth_service.refresh(body.refresh_token)
    return TokenPairResponse.from_tokens(tokens)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Revoke a refresh token",
)
async def logout(body: LogoutRequest, auth_service: AuthServiceDep):
    """Revoke the given refresh token. Already-used or unknown tokens are accepted."""
    await auth_service.logout(body.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserInfoResponse,
    summary="Get current user info",
)
async def get_current_user_info(identity: CurrentIdentity):
    """
    Get information about the currently authenticated user.

    Requires `Authorization: Bearer <access_token>`.
    """
    return UserInfoResponse.from_account(identity.account)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get current user profile",
)
async def get_profile(identity: CurrentIdentity, auth_service: AuthServiceDep):
    profile = await auth_service.get_profile(identity.user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return ProfileResponse.from_profile(profile)


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Check whether the request is authenticated",
)
async def get_session(identity: OptionalIdentity):
    """Works with or without a token; an invalid token is treated as anonymous."""
    if identity is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user_id=identity.user_id)


@router.put("/profile", summary="Update profile (not implemented)")
async def update_profile(identity: CurrentIdentity):
    # TODO: accept username, full_name and country updates
    raise not_implemented()


@router.post("/change-password", summary="Change password (not implemented)")
async def change_password(identity: CurrentIdentity):
    raise not_implemented()


@router.post("/enable-2fa", summary="Enable two-factor authentication (not implemented)")
async def enable_2fa(identity: CurrentIdentity):
    raise not_implemented()
