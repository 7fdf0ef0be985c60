"""Cache-Control middleware.

Vanity pages only change when the config changes, so every response,
including 404 and 405 responses, is marked publicly cacheable for a
fixed number of seconds.
"""

from vanity.config import DEFAULT_MAX_AGE
from vanity.http.request import Request
from vanity.http.response import Response
from vanity.middleware.protocol import Next


class CacheControlMiddleware:
    """Set ``Cache-Control: public, max-age=<N>`` on every response.

    Usage::

        app.add_middleware(CacheControlMiddleware(max_age=3600))
    """

    __slots__ = ("max_age", "value")

    def __init__(self, max_age: int = DEFAULT_MAX_AGE) -> None:
        if max_age < 0:
            msg = f"max_age must be >= 0, got {max_age}"
            raise ValueError(msg)
        self.max_age = max_age
        self.value = f"public, max-age={max_age}"

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        return response.with_header("Cache-Control", self.value)
