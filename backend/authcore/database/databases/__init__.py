"""
Database definitions and collection constants.
"""
from authcore.database.databases import auth_db

__all__ = ["auth_db"]
