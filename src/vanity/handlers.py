"""Route handlers for configured prefixes and the generated index.

Handlers are plain closures built once at freeze time. Everything they
capture is immutable, so they are safe to call from any worker.
"""

import logging
from collections.abc import Callable, Iterable

from kida import Environment

from vanity.config import PathEntry
from vanity.http.request import Request
from vanity.http.response import Response
from vanity.templating import index_import_paths, render_index_page, render_vanity_page

logger = logging.getLogger("vanity.app")

type PageHandler = Callable[[Request], Response]


def vanity_handler(env: Environment, host: str, entry: PathEntry) -> PageHandler:
    """Build the handler serving a resolved *entry*."""

    def vanity_page(request: Request) -> Response:
        body = render_vanity_page(
            env,
            host=host,
            path=request.path,
            repo=entry.repo,
            display=entry.display,
            vcs=entry.vcs,
        )
        return Response(body=body)

    vanity_page.__qualname__ = f"vanity_page[{entry.prefix}]"
    return vanity_page


def index_handler(env: Environment, host: str, prefixes: Iterable[str]) -> PageHandler:
    """Build the handler for ``/`` listing every configured import path."""
    import_paths = index_import_paths(host, prefixes)
    logger.debug("Index import paths: %s", import_paths)

    def index_page(request: Request) -> Response:  # noqa: ARG001
        return Response(body=render_index_page(env, host=host, import_paths=import_paths))

    return index_page
