"""
Auth database configuration.
Stores account identity, login state and profiles.
"""

DB_NAME = "auth_db"


class Collections:
    """Collection names in auth_db."""
    USERS = "users"
    PROFILES = "profiles"
