"""
Core module - Security, errors, and logging utilities.
"""
from authcore.core.errors import (
    AccountLockedError,
    AuthError,
    DuplicateAccountError,
    InvalidCredentialsError,
    TokenInvalidError,
    UnauthorizedError,
    WeakPasswordError,
    register_exception_handlers,
)
from authcore.core.log import configure_logging
from authcore.core.security import (
    TokenIssuer,
    hash_password,
    validate_password_strength,
    verify_password,
)

__all__ = [
    "AuthError",
    "AccountLockedError",
    "DuplicateAccountError",
    "InvalidCredentialsError",
    "TokenInvalidError",
    "UnauthorizedError",
    "WeakPasswordError",
    "register_exception_handlers",
    "configure_logging",
    "TokenIssuer",
    "hash_password",
    "validate_password_strength",
    "verify_password",
]
