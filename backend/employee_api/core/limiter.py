"""
Rate limiter singleton — shared across the application.

Uses slowapi (built on top of limits) to throttle per-IP over a moving
window. Every handler is wrapped with ``rate_limit``, a shared limit whose
single scope makes all routes draw on one counter per client.
The limiter is attached to `app.state.limiter` in main.py.

In tests the limiter is enabled=False so that rapid test requests
don't trigger 429 responses (see conftest.py).
"""

from fastapi import Request
from fastapi.responses import PlainTextResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from employee_api.core.config import settings

RATE_LIMIT_SCOPE = "employee-api"

limiter = Limiter(
    key_func=get_remote_address,
    strategy="moving-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Decorated handlers must accept a ``request: Request`` argument
rate_limit = limiter.shared_limit(settings.RATE_LIMIT, scope=RATE_LIMIT_SCOPE)


def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> PlainTextResponse:
    return PlainTextResponse(settings.RATE_LIMIT_MESSAGE, status_code=429)
