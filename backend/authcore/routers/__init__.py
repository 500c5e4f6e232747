"""
API Routers module.
"""
from authcore.routers import auth, health

__all__ = ["auth", "health"]
