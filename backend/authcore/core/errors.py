"""
Authentication error taxonomy and the JSON error envelope.

Domain errors carry the HTTP status they map to, so routers can let them
propagate and the handlers registered here render ``{"error": "<message>"}``.
Store and other infrastructure failures are not wrapped; they fall through to
the generic 500 handler.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base class for authentication domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Authentication error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return None


class InvalidCredentialsError(AuthError):
    """Wrong password or unknown email; the two are deliberately indistinguishable."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class AccountLockedError(AuthError):
    """A lockout marker exists for the email."""

    status_code = status.HTTP_423_LOCKED
    default_message = "Account is locked"


class TokenInvalidError(AuthError):
    """Bad signature, malformed token, expired token or unknown refresh token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class WeakPasswordError(AuthError):
    """
    Password does not satisfy the strength policy.

    Args:
        missing: Human-readable descriptions of every unmet requirement
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Password is too weak"

    def __init__(self, missing: list[str]):
        self.missing = tuple(missing)
        super().__init__("password must contain " + ", ".join(self.missing))


class DuplicateAccountError(AuthError):
    """An account with this email already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists"


class UnauthorizedError(AuthError):
    """Request-boundary authentication failure."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


def error_response(
    status_code: int,
    message: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build the ``{"error": message}`` JSON response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Attach JSON error handlers to the FastAPI app.

    - AuthError subclasses render with their own status code.
    - HTTPException keeps its status; ``detail`` becomes the message.
    - Request validation failures become 400.
    - Anything else is a 500 with the traceback logged, never leaked.
    """

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        logger.info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
        return error_response(exc.status_code, exc.message, exc.headers)

    @app.exception_handler(HTTPException)
    async def handle_http_exception(request: Request, exc: HTTPException):
        return error_response(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request body"
        if errors:
            field = ".".join(str(part) for part in errors[0].get("loc", ())[1:])
            detail = errors[0].get("msg", "")
            message = f"{field}: {detail}" if field else detail or message
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )
