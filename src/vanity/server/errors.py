"""Error responses for vanity requests.

Maps HTTPError exceptions and unexpected failures to plain-text
Response objects.
"""

import logging

from vanity.errors import HTTPError
from vanity.http.request import Request
from vanity.http.response import Response

logger = logging.getLogger("vanity.server")


def http_error_response(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    """Map an HTTPError to a Response carrying its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    response = Response(body=detail, status=exc.status, content_type="text/plain; charset=utf-8")
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, *, debug: bool = False) -> Response:
    """Log an unexpected exception and return a 500."""
    logger.exception("500 %s %s", request.method, request.path)
    body = f"Internal Server Error: {exc!r}" if debug else "Internal Server Error"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
