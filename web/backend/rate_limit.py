#!/usr/bin/env python3
"""
Per-client rate limiting shared by every router.
"""

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .config import get_config
from .exceptions import rate_limit_exceeded_handler

_rate_config = get_config().rate_limit

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_rate_config.default],
    enabled=_rate_config.enabled
)


def add_rate_limit_handlers(app: FastAPI) -> None:
    """Apply the default limit to all routes and render 429s in the error envelope."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
