"""
Service layer for business logic.
"""
from authcore.services.auth_service import AuthService

__all__ = [
    "AuthService",
]
