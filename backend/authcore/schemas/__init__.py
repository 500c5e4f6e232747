"""
Request and response schemas for API endpoints.
"""
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

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "MessageResponse",
    "ProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "SessionResponse",
    "TokenPairResponse",
    "UserInfoResponse",
]
