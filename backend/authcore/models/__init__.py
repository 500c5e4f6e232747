"""
Pydantic models for database documents and data structures.
"""
from authcore.models.account import (
    AccessClaims,
    Account,
    Identity,
    LoginResult,
    NewAccount,
    TokenPair,
    UserProfile,
)

__all__ = [
    "Account",
    "NewAccount",
    "UserProfile",
    "AccessClaims",
    "TokenPair",
    "LoginResult",
    "Identity",
]
