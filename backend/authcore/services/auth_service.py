"""
Authentication service: registration, login with lockout, refresh rotation, logout.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from starlette.concurrency import run_in_threadpool

from authcore.config import AuthConfig
from authcore.core.errors import (
    AccountLockedError,
    DuplicateAccountError,
    InvalidCredentialsError,
    TokenInvalidError,
)
from authcore.core.security import (
    TokenIssuer,
    dummy_password_hash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from authcore.models.account import (
    AccessClaims,
    Account,
    LoginResult,
    NewAccount,
    TokenPair,
    UserProfile,
)
from authcore.stores.credential_store import CredentialStore
from authcore.stores.session_store import SessionStore, lockout_key, refresh_token_key

logger = logging.getLogger(__name__)

LOCKOUT_MARKER = "locked"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """
    Service for authentication operations.

    Holds no per-request state; one instance can serve concurrent requests.
    bcrypt work runs in the threadpool so it does not block the event loop.
    None of the multi-step sequences below are atomic across store calls:
    concurrent failed logins for one account can lose counter increments, and
    a crash between deleting and re-issuing a refresh record drops the
    session rather than leaving the old token usable.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionStore,
        tokens: TokenIssuer,
        config: AuthConfig,
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.tokens = tokens
        self.config = config

    async def register(
        self,
        email: str,
        password: str,
        *,
        wallet_address: Optional[str] = None,
    ) -> Account:
        """
        Register a new account and its empty profile.

        Args:
            email: Account email (compared case-insensitively)
            password: Plain text password
            wallet_address: Optional wallet address stored on the account

        Returns:
            The created Account

        Raises:
            DuplicateAccountError: If the email is already registered
            WeakPasswordError: If the password fails the strength policy
        """
        email = normalize_email(email)

        if await self.credentials.find_by_email(email) is not None:
            raise DuplicateAccountError()

        validate_password_strength(password)

        account = await self.credentials.create(
            NewAccount(
                email=email,
                hashed_password=await run_in_threadpool(hash_password, password),
                wallet_address=wallet_address,
            )
        )

        # No rollback: a failure here leaves an account without a profile.
        await self.credentials.create_profile(account.id, username=account.email)

        logger.info(f"Registered account {account.id}")
        return account

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate by email and password and issue a token pair.

        A locked account is rejected before any password work. A wrong
        password increments the persisted failure counter and, once it
        reaches ``max_login_attempts``, writes a lockout marker with TTL
        ``lockout_duration``; the caller still only sees InvalidCredentials.

        Raises:
            AccountLockedError: If a lockout marker exists for the email
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        email = normalize_email(email)
        lock_key = lockout_key(email)

        if await self.sessions.get(lock_key) is not None:
            raise AccountLockedError()

        account = await self.credentials.find_by_email(email)
        if account is None:
            # Same bcrypt cost as a real comparison
            await run_in_threadpool(verify_password, password, dummy_password_hash())
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, account.hashed_password):
            await self._record_failed_attempt(account, lock_key)
            raise InvalidCredentialsError()

        now = datetime.now(timezone.utc)
        await self.credentials.update_login_state(
            account.id,
            failed_attempts=0,
            locked_until=None,
            last_login=now,
        )
        account = account.model_copy(
            update={"failed_attempts": 0, "locked_until": None, "last_login": now}
        )

        tokens = await self._issue_session(account)
        logger.info(f"Login succeeded for account {account.id}")
        return LoginResult(tokens=tokens, account=account)

    async def _record_failed_attempt(self, account: Account, lock_key: str) -> None:
        attempts = account.failed_attempts + 1

        if attempts >= self.config.max_login_attempts:
            locked_until = datetime.now(timezone.utc) + self.config.lockout_duration
            await self.sessions.set(lock_key, LOCKOUT_MARKER, self.config.lockout_duration)
            await self.credentials.update_login_state(
                account.id,
                failed_attempts=attempts,
                locked_until=locked_until,
                last_login=account.last_login,
            )
            logger.warning(
                f"Account {account.id} locked after {attempts} failed attempts "
                f"until {locked_until.isoformat()}"
            )
            return

        await self.credentials.update_login_state(
            account.id,
            failed_attempts=attempts,
            locked_until=account.locked_until,
            last_login=account.last_login,
        )
        logger.info(f"Failed login for account {account.id} ({attempts} attempts)")

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair.

        The presented token is consumed: its record is deleted before the new
        pair is issued, so it can never be used again.

        Raises:
            TokenInvalidError: If the token is unknown, consumed, expired, or
                its account no longer exists
        """
        key = refresh_token_key(self.tokens.fingerprint(refresh_token))

        user_id = await self.sessions.get(key)
        if user_id is None:
            raise TokenInvalidError("Invalid refresh token")

        account = await self.credentials.find_by_id(user_id)
        if account is None:
            raise TokenInvalidError("Invalid refresh token")

        await self.sessions.delete(key)

        tokens = await self._issue_session(account)
        logger.info(f"Rotated refresh token for account {account.id}")
        return tokens

    async def logout(self, refresh_token: str) -> None:
        """Consume a refresh token. Unknown or already-consumed tokens are a no-op."""
        key = refresh_token_key(self.tokens.fingerprint(refresh_token))
        await self.sessions.delete(key)
        logger.info("Refresh token revoked on logout")

    def verify_access_token(self, token: str) -> AccessClaims:
        """
        Verify an access token.

        Raises:
            TokenInvalidError: On bad signature, malformed token or expiry
        """
        return self.tokens.verify_access(token)

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return await self.credentials.get_profile(user_id)

    async def _issue_session(self, account: Account) -> TokenPair:
        claims = self.tokens.build_claims(
            account.id,
            account.email,
            self.config.issuer,
            self.config.access_ttl,
        )
        refresh_token = self.tokens.issue_refresh()

        await self.sessions.set(
            refresh_token_key(self.tokens.fingerprint(refresh_token)),
            account.id,
            self.config.refresh_ttl,
        )

        return TokenPair(
            access_token=self.tokens.sign(claims),
            refresh_token=refresh_token,
            expires_at=int(claims.expires_at.timestamp()),
        )
