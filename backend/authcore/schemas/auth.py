"""
Authentication request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from authcore.models.account import Account, TokenPair, UserProfile


class RegisterRequest(BaseModel):
    """Registration request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    confirm_password: str = Field(..., description="Password confirmation")
    wallet_address: Optional[str] = Field(None, description="Optional wallet address")

    def passwords_match(self) -> bool:
        """Check if password and confirmation match."""
        return self.password == self.confirm_password


class RegisterResponse(BaseModel):
    """Registration response."""
    message: str = Field(
        default="User registered successfully",
        description="Success message"
    )
    user_id: str = Field(..., description="Created user ID")


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserInfoResponse(BaseModel):
    """Public account information; never includes the password hash."""
    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User email")
    wallet_address: Optional[str] = Field(None, description="Linked wallet address")
    two_factor_enabled: bool = Field(..., description="Multi-factor authentication flag")
    is_active: bool = Field(..., description="Account may authenticate")
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: datetime = Field(..., description="Account creation timestamp")

    @classmethod
    def from_account(cls, account: Account) -> "UserInfoResponse":
        return cls(
            id=account.id,
            email=account.email,
            wallet_address=account.wallet_address,
            two_factor_enabled=account.two_factor_enabled,
            is_active=account.is_active,
            last_login=account.last_login,
            created_at=account.created_at,
        )


class LoginResponse(BaseModel):
    """Login response with the account and a fresh token pair."""
    user: UserInfoResponse
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque single-use refresh token")
    expires_at: int = Field(..., description="Access token expiry, unix seconds")


class RefreshRequest(BaseModel):
    """Refresh request body."""
    refresh_token: str = Field(..., min_length=1, description="Refresh token to rotate")


class LogoutRequest(BaseModel):
    """Logout request body."""
    refresh_token: str = Field(..., min_length=1, description="Refresh token to revoke")


class TokenPairResponse(BaseModel):
    """Rotated token pair."""
    access_token: str = Field(..., description="New JWT access token")
    refresh_token: str = Field(..., description="New refresh token")
    expires_at: int = Field(..., description="Access token expiry, unix seconds")

    @classmethod
    def from_tokens(cls, tokens: TokenPair) -> "TokenPairResponse":
        return cls(**tokens.model_dump())


class ProfileResponse(BaseModel):
    """Profile record of the current user."""
    user_id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(**profile.model_dump())


class SessionResponse(BaseModel):
    """Whether the request carried a valid access token."""
    authenticated: bool
    user_id: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
