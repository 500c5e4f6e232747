"""
authcore - FastAPI Application

Credential and session service for the staking dashboard API: registration,
password login with lockout, short-lived access tokens and rotating refresh
tokens.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authcore.config import get_settings
from authcore.core.errors import register_exception_handlers
from authcore.core.log import configure_logging
from authcore.database.connections import close_connections, get_mongo_client
from authcore.database.registry import create_indexes
from authcore.routers import auth, health

API_PREFIX = "/api/v1"

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize database connections
    - Create indexes

    Shutdown:
    - Close all database connections
    """
    logger.info("Starting up authcore API...")

    client = await get_mongo_client()
    try:
        await create_indexes(client)
        logger.info("Indexes created")
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    logger.info("Shutting down authcore API...")
    await close_connections()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title="authcore API",
    description="""
## Authentication API

Account registration, login and session management.

### Authentication
Protected endpoints require an access token in the `Authorization` header:
```
GET /api/v1/auth/me
Authorization: Bearer <access_token>
```

Obtain a token pair via `POST /api/v1/auth/login`. Access tokens are short
lived; exchange the refresh token at `POST /api/v1/auth/refresh` for a new
pair. Each refresh token works once.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(auth.router, prefix=API_PREFIX)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "authcore API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
