"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    CacheControlMiddleware -- fixed ``Cache-Control`` header on every response
"""

from vanity.middleware.cache_control import CacheControlMiddleware
from vanity.middleware.protocol import Middleware, Next

__all__ = [
    "CacheControlMiddleware",
    "Middleware",
    "Next",
]
