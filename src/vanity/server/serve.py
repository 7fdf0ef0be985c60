"""Server entry point — runs a vanity App on pounce.

Single worker with auto-reload in debug mode, otherwise the configured
worker count. Bind failures surface as ``ListenError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vanity.errors import ListenError

if TYPE_CHECKING:
    from vanity.app import App

logger = logging.getLogger("vanity.server")


def run_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 3000,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    access_log: bool = True,
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
) -> None:
    """Start a pounce server for *app* and block until it stops.

    Args:
        app: Vanity App instance (an ASGI callable).
        host: Bind address (default: all interfaces).
        port: Bind port (default: 3000).
        workers: Worker count (0 = auto-detect from CPU count).
        reload: Restart on source changes; forces a single worker.
        log_level: pounce log level (debug, info, warning, error).
        access_log: Emit one access log line per request.
        keep_alive_timeout: Keep-alive connection timeout (seconds).
        request_timeout: Individual request timeout (seconds).

    Raises:
        ListenError: If the listen settings are rejected or the socket
            cannot be bound.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    try:
        config = ServerConfig(
            host=host,
            port=port,
            workers=1 if reload else workers,
            reload=reload,
            log_level=log_level,
            access_log=access_log,
            keep_alive_timeout=keep_alive_timeout,
            request_timeout=request_timeout,
        )
    except ValueError as exc:
        msg = f"cannot listen on {host}:{port}: {exc}"
        raise ListenError(msg) from exc

    logger.info("Serving vanity imports for %s on %s:%d", app.config.host, host, port)
    server = Server(config, app)
    try:
        server.run()
    except OSError as exc:
        msg = f"cannot listen on {host}:{port}: {exc}"
        raise ListenError(msg) from exc
