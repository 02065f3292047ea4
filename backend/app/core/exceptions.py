"""
Domain errors raised by services and their HTTP rendering.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from app.core.utils import utcnow
import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, **extra: Any):
        self.detail = detail or self.detail
        self.extra: Dict[str, Any] = extra
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.detail, **self.extra}

    def headers(self) -> Optional[Dict[str, str]]:
        return None


class NotFoundError(AppError):
    """Photo, gallery or photo-within-gallery does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class GalleryExpiredError(AppError):
    """Gallery exists but is past its expiry."""
    status_code = status.HTTP_410_GONE
    detail = "Gallery has expired"


class GalleryAccessDeniedError(AppError):
    """
    Gallery is password protected.

    `reason` is machine readable so clients can tell "show password box"
    (password_required) apart from "show error" (password_incorrect).
    """
    status_code = status.HTTP_401_UNAUTHORIZED

    PASSWORD_REQUIRED = "password_required"
    PASSWORD_INCORRECT = "password_incorrect"

    def __init__(self, reason: str):
        detail = "Password required" if reason == self.PASSWORD_REQUIRED else "Incorrect password"
        super().__init__(detail, reason=reason, requiresAuth=True)
        self.reason = reason


class RateLimitExceededError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    detail = "Too many like requests, please try again later."

    def __init__(self, retry_after: datetime):
        super().__init__(retryAfter=retry_after.isoformat() + "Z")
        self.retry_after = retry_after

    def headers(self) -> Optional[Dict[str, str]]:
        seconds = max(0, int((self.retry_after - utcnow()).total_seconds()))
        return {"Retry-After": str(seconds)}


class LikeConflictError(AppError):
    """A concurrent toggle for the same (subject, visitor) won the race."""
    status_code = status.HTTP_409_CONFLICT
    detail = "Like state changed concurrently, please refresh and retry"


class LikeUpdateError(AppError):
    """Counter update matched no row after the ledger write."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Failed to update photo likes"


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return app
