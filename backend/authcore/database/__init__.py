"""
Database module - MongoDB and Redis connections and database definitions.
"""
from authcore.database.connections import (
    get_mongo_client,
    get_redis_client,
    close_connections,
)
from authcore.database.databases import auth_db

__all__ = [
    "get_mongo_client",
    "get_redis_client",
    "close_connections",
    "auth_db",
]
