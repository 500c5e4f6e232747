"""
Account, profile and token models for the auth database and token layer.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(BaseModel):
    """
    Account document model for MongoDB auth_db.users collection.

    Login state (``failed_attempts``, ``locked_until``, ``last_login``) is
    only ever written by AuthService through the credential store.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="MongoDB ObjectId as string")
    email: EmailStr = Field(..., description="Unique email address")
    hashed_password: str = Field(..., description="Bcrypt hashed password")
    wallet_address: Optional[str] = Field(None, description="Linked wallet address")
    two_factor_enabled: bool = Field(
        default=False,
        description="Reserved for multi-factor authentication"
    )
    is_active: bool = Field(default=True, description="Account may authenticate")
    failed_attempts: int = Field(
        default=0,
        description="Number of consecutive failed login attempts"
    )
    locked_until: Optional[datetime] = Field(
        None,
        description="Account locked until this timestamp (record-keeping only)"
    )
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class NewAccount(BaseModel):
    """Parameters for creating an account; the password is already hashed."""
    email: EmailStr
    hashed_password: str
    wallet_address: Optional[str] = None


class UserProfile(BaseModel):
    """Profile document created alongside every account."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., description="Owning account ID")
    username: Optional[str] = Field(None, description="Display name, defaults to email")
    full_name: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class AccessClaims(BaseModel):
    """
    Claims carried by a signed access token.

    Serialized with JWT registered claim names for issuer and timestamps.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    issuer: str
    issued_at: datetime
    expires_at: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "iss": self.issuer,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccessClaims":
        return cls(
            user_id=payload.get("user_id"),
            email=payload.get("email"),
            issuer=payload.get("iss"),
            issued_at=payload.get("iat"),
            expires_at=payload.get("exp"),
        )


class TokenPair(BaseModel):
    """Access token, refresh token, and the access token expiry (unix seconds)."""
    access_token: str
    refresh_token: str
    expires_at: int


@dataclass(frozen=True, slots=True)
class LoginResult:
    tokens: TokenPair
    account: Account


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller, resolved once per request from a bearer token."""
    user_id: str
    account: Account
