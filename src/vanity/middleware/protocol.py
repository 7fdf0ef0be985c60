"""Middleware shape shared by the app and the request handler.

Middleware wraps page dispatch. The first middleware registered is the
outermost, and ``CacheControlMiddleware`` is always placed in front of
anything added through ``App.add_middleware()``.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from vanity.http.request import Request
from vanity.http.response import Response

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Any async callable taking the request and the rest of the chain.

    For example, counting requests from the go tool::

        async def count_go_get(request: Request, next: Next) -> Response:
            if b"go-get=1" in request.query_string:
                stats["go-get"] += 1
            return await next(request)
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
