"""
Security utilities for password hashing and JWT token management.
"""
import hashlib
import secrets
import string
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from authcore.core.errors import TokenInvalidError, WeakPasswordError
from authcore.models.account import AccessClaims

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 8
SPECIAL_CHARACTERS = "!@#$%^&*"

REFRESH_TOKEN_BYTES = 32


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise. A password bcrypt cannot
        accept (it contains a NUL byte) never matches.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """
    Return a real bcrypt hash of a random secret, computed once per process.

    Login compares against it when the email is unknown so that path costs a
    full bcrypt verification, like the wrong-password path.
    """
    return pwd_context.hash(secrets.token_urlsafe(32))


def validate_password_strength(password: str) -> None:
    """
    Check a candidate password against the strength policy.

    Every unmet requirement is collected before failing, so the caller can
    report them all at once.

    Args:
        password: Candidate plain text password

    Raises:
        WeakPasswordError: If any requirement is missing
    """
    missing = []
    if len(password) < MIN_PASSWORD_LENGTH:
        missing.append(f"at least {MIN_PASSWORD_LENGTH} characters")
    if not any(c in string.ascii_uppercase for c in password):
        missing.append("an uppercase letter")
    if not any(c in string.ascii_lowercase for c in password):
        missing.append("a lowercase letter")
    if not any(c in string.digits for c in password):
        missing.append("a digit")
    if not any(c in SPECIAL_CHARACTERS for c in password):
        missing.append(f"a special character ({SPECIAL_CHARACTERS})")
    if "\x00" in password:
        missing.append("no NUL characters")

    if missing:
        raise WeakPasswordError(missing)


def fingerprint(token: str, secret: str) -> str:
    """
    Deterministic one-way digest of a refresh token.

    The session store is keyed by this value so raw refresh tokens are never
    kept at rest.
    """
    return hashlib.sha256((token + secret).encode("utf-8")).hexdigest()


class TokenIssuer:
    """
    Signs and verifies access tokens, and mints opaque refresh tokens.

    Access tokens are HS256 JWTs carrying ``user_id``, ``email``, ``iss``,
    ``iat`` and ``exp``. Refresh tokens carry nothing; they are random
    bearer values that only mean something as a session store key.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def build_claims(
        self,
        user_id: str,
        email: str,
        issuer: str,
        ttl: timedelta,
    ) -> AccessClaims:
        # JWT timestamps are whole seconds
        now = datetime.now(timezone.utc).replace(microsecond=0)
        return AccessClaims(
            user_id=user_id,
            email=email,
            issuer=issuer,
            issued_at=now,
            expires_at=now + ttl,
        )

    def sign(self, claims: AccessClaims) -> str:
        return jwt.encode(
            claims.to_payload(),
            self.secret,
            algorithm=self.algorithm,
        )

    def issue_access(
        self,
        user_id: str,
        email: str,
        issuer: str,
        ttl: timedelta,
    ) -> str:
        """
        Create a signed access token.

        Args:
            user_id: Account identifier
            email: Account email
            issuer: Value for the ``iss`` claim
            ttl: Lifetime from now

        Returns:
            Encoded JWT token string
        """
        return self.sign(self.build_claims(user_id, email, issuer, ttl))

    def verify_access(self, token: str) -> AccessClaims:
        """
        Decode and validate an access token.

        Signature, structure and expiry failures are reported the same way,
        so callers cannot tell an expired token from a forged one.

        Args:
            token: The JWT token string to decode

        Returns:
            The verified claims

        Raises:
            TokenInvalidError: If the token is invalid or expired
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True},
            )
            return AccessClaims.from_payload(payload)
        except (JWTError, ValidationError) as e:
            raise TokenInvalidError() from e

    def issue_refresh(self) -> str:
        """Return a fresh 256-bit random refresh token, hex encoded."""
        return secrets.token_hex(REFRESH_TOKEN_BYTES)

    def fingerprint(self, token: str) -> str:
        return fingerprint(token, self.secret)
