"""
Durable account storage.

The service layer depends only on the CredentialStore protocol;
MongoCredentialStore is the MongoDB adapter over auth_db.
"""
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from authcore.core.errors import DuplicateAccountError
from authcore.database.databases import auth_db
from authcore.models.account import Account, NewAccount, UserProfile


class CredentialStore(Protocol):
    """Account records plus the profile created with each account."""

    async def find_by_email(self, email: str) -> Optional[Account]: ...

    async def find_by_id(self, user_id: str) -> Optional[Account]: ...

    async def create(self, params: NewAccount) -> Account: ...

    async def update_login_state(
        self,
        user_id: str,
        failed_attempts: int,
        locked_until: Optional[datetime],
        last_login: Optional[datetime],
    ) -> None: ...

    async def create_profile(self, user_id: str, username: str) -> UserProfile: ...

    async def get_profile(self, user_id: str) -> Optional[UserProfile]: ...


def _to_object_id(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


def _to_account(user_doc: dict[str, Any]) -> Account:
    user_doc["_id"] = str(user_doc["_id"])
    return Account(**user_doc)


class MongoCredentialStore:
    """CredentialStore over the ``users`` and ``profiles`` collections of auth_db."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]
        self.profiles_collection = db[auth_db.Collections.PROFILES]

    async def find_by_email(self, email: str) -> Optional[Account]:
        user_doc = await self.users_collection.find_one({"email": email})
        if not user_doc:
            return None
        return _to_account(user_doc)

    async def find_by_id(self, user_id: str) -> Optional[Account]:
        """
        Get account by ID.

        Args:
            user_id: Account ObjectId as string

        Returns:
            Account or None if not found or the ID is not a valid ObjectId
        """
        oid = _to_object_id(user_id)
        if oid is None:
            return None

        user_doc = await self.users_collection.find_one({"_id": oid})
        if not user_doc:
            return None
        return _to_account(user_doc)

    async def create(self, params: NewAccount) -> Account:
        """
        Insert a new account document.

        Raises:
            DuplicateAccountError: If the unique email index rejects the insert
        """
        now = datetime.now(timezone.utc)
        user_doc = {
            "email": params.email,
            "hashed_password": params.hashed_password,
            "wallet_address": params.wallet_address,
            "two_factor_enabled": False,
            "is_active": True,
            "failed_attempts": 0,
            "locked_until": None,
            "last_login": None,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            raise DuplicateAccountError() from e

        user_doc["_id"] = result.inserted_id
        return _to_account(user_doc)

    async def update_login_state(
        self,
        user_id: str,
        failed_attempts: int,
        locked_until: Optional[datetime],
        last_login: Optional[datetime],
    ) -> None:
        await self.users_collection.update_one(
            {"_id": ObjectId(user_id)},
            {
                "$set": {
                    "failed_attempts": failed_attempts,
                    "locked_until": locked_until,
                    "last_login": last_login,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
        )

    async def create_profile(self, user_id: str, username: str) -> UserProfile:
        profile = UserProfile(user_id=user_id, username=username)
        await self.profiles_collection.insert_one(profile.model_dump())
        return profile

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        profile_doc = await self.profiles_collection.find_one({"user_id": user_id})
        if not profile_doc:
            return None
        profile_doc.pop("_id", None)
        return UserProfile(**profile_doc)
