# safarsorted/core/deps.py
from fastapi import Depends, Request

from safarsorted.core.config import settings
from safarsorted.core.errors import RateLimited, Unauthorized
from safarsorted.core.security import authenticate
from safarsorted.db.store import InquiryStore, store
from safarsorted.services.rate_limit import SlidingWindowRateLimiter, inquiry_limiter


def get_store() -> InquiryStore:
    return store


def get_rate_limiter() -> SlidingWindowRateLimiter:
    return inquiry_limiter


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(
    request: Request,
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> None:
    """Gate for the public submission route (per client IP)."""
    if not limiter.allow(client_key(request)):
        raise RateLimited()


def require_admin(request: Request) -> str:
    """
    HTTP Basic check for /api/admin/*. Every failure answers the same
    generic 401 so callers can't tell which part was wrong.
    """
    if not authenticate(request.headers.get("Authorization"), settings.ADMIN_USER, settings.ADMIN_PASS):
        raise Unauthorized()
    return settings.ADMIN_USER
