"""Per-address request limits for the dashboard API."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ngo_api.core.config import settings


def _per_minute(count: int) -> str:
    return f"{count}/minute"


# Counters live in process memory; the API runs as a single worker
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    default_limits=[_per_minute(settings.RATE_LIMIT_API)] if settings.RATE_LIMIT_API > 0 else [],
    enabled=not settings.TESTING,
)

AUTH_LIMIT = _per_minute(settings.RATE_LIMIT_AUTH)
PUBLIC_SUBMIT_LIMIT = _per_minute(settings.RATE_LIMIT_PUBLIC_SUBMIT)
