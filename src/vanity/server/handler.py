"""Per-request pipeline: ASGI scope in, vanity page out.

Builds a Request from the scope, runs it through the middleware chain
around the router, and hands the Response to ``send_response``.
"""

import logging
from collections.abc import Callable
from typing import Any

from vanity._internal.asgi import Receive, Scope, Send
from vanity.errors import HTTPError
from vanity.http.request import Request
from vanity.http.response import Response
from vanity.middleware.protocol import Next
from vanity.routing.router import Router
from vanity.server.errors import http_error_response, internal_error_response
from vanity.server.sender import send_response

logger = logging.getLogger("vanity.server")


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    async def dispatch(req: Request) -> Response:
        match = router.match(req.method, req.path)
        logger.debug("%s %s -> %s (%r)", req.method, req.path, match.route.prefix, match.subpath)
        return match.route.handler(req)

    # Each layer turns failures below it into a response.
    handler = _guard(dispatch, debug=debug)
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = _guard(make_next, debug=debug)

    response = await handler(request)
    await send_response(response, send, method=request.method)


def _guard(handler: Next, *, debug: bool) -> Next:
    """Wrap *handler* so exceptions become error responses."""

    async def guarded(req: Request) -> Response:
        try:
            return await handler(req)
        except HTTPError as exc:
            return http_error_response(exc, req, debug=debug)
        except Exception as exc:
            return internal_error_response(exc, req, debug=debug)

    return guarded
