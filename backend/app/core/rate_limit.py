"""
Like rate limiting with slowapi.

Both like routes share one fixed window per client address. The default
`memory://` storage is per process; point RATE_LIMIT_STORAGE_URI at a shared
backend when running several workers.
"""
from datetime import datetime, timedelta, timezone
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from app.core.config import settings
from app.core.exceptions import RateLimitExceededError
from app.core.utils import utcnow


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address.

    X-Forwarded-For is client controlled, so its first hop is only used when
    the service runs behind a proxy that sets it (TRUST_FORWARDED_FOR).
    """
    if settings.TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            first_hop = forwarded.split(",")[0].strip()
            if first_hop:
                return first_hop
    return request.client.host if request.client else "unknown"


LIKE_RATE_LIMIT = f"{settings.LIKE_RATE_LIMIT_MAX}/{settings.LIKE_RATE_LIMIT_WINDOW_SECONDS} seconds"

limiter = Limiter(
    key_func=get_client_ip,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
)

like_rate_limit = limiter.shared_limit(LIKE_RATE_LIMIT, scope="likes")


def _window_reset(request: Request, exc: RateLimitExceeded) -> datetime:
    current = getattr(request.state, "view_rate_limit", None)
    if current:
        item, identifiers = current
        reset_time, _ = limiter.limiter.get_window_stats(item, *identifiers)
        return datetime.fromtimestamp(reset_time, tz=timezone.utc).replace(tzinfo=None)
    return utcnow() + timedelta(seconds=exc.limit.limit.get_expiry())


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 with the window reset time as `retryAfter` and a Retry-After header."""
    error = RateLimitExceededError(_window_reset(request, exc))
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict(),
        headers=error.headers(),
    )
