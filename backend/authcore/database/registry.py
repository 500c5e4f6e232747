"""
Index management for the auth database.
"""
from motor.motor_asyncio import AsyncIOMotorClient

from authcore.database.databases import auth_db


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create necessary indexes for auth_db."""
    db = client[auth_db.DB_NAME]
    await db[auth_db.Collections.USERS].create_index("email", unique=True)
    await db[auth_db.Collections.PROFILES].create_index("user_id", unique=True)
