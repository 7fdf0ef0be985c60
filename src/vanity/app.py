"""Vanity application class.

Built from a ``VanityConfig``. Mutable during setup (extra middleware
only), frozen when ``app.run()`` or ``__call__()`` is first invoked.
Freezing resolves every path entry, compiles the route table, and loads
the templates, so configuration errors surface before the server binds.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from vanity._internal.asgi import Receive, Scope, Send
from vanity.config import ServerConfig, VanityConfig, load_config
from vanity.handlers import index_handler, vanity_handler
from vanity.middleware.cache_control import CacheControlMiddleware
from vanity.middleware.protocol import Middleware
from vanity.resolve import resolve_config
from vanity.routing.route import Route
from vanity.routing.router import Router
from vanity.server.handler import handle_request
from vanity.templating import create_environment

logger = logging.getLogger("vanity.app")


class App:
    """The vanity application.

    Usage::

        app = App.from_file("vanity.yml")
        app.run()

    Thread safety:
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even when several pounce workers call
        ``__call__()`` concurrently on the first request. After that every
        piece of state is read-only.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_resolved",
        "_router",
        "config",
        "server_config",
    )

    def __init__(self, config: VanityConfig, server_config: ServerConfig | None = None) -> None:
        self.config: VanityConfig = config
        self.server_config: ServerConfig = server_config or ServerConfig()
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._resolved: VanityConfig | None = None
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()

    @classmethod
    def from_file(cls, path: str | Path, server_config: ServerConfig | None = None) -> "App":
        """Load a vanity YAML file and build an App from it."""
        return cls(load_config(path), server_config)

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add middleware, run inside the Cache-Control middleware."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Compiled state --

    @property
    def router(self) -> Router:
        """The compiled route table. Freezes the app if needed."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    @property
    def resolved(self) -> VanityConfig:
        """The config with every entry's display and VCS filled in."""
        self._ensure_frozen()
        assert self._resolved is not None
        return self._resolved

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with pounce.

        Raises:
            ConfigurationError: If any path entry fails to resolve.
            ListenError: If the port cannot be bound.
        """
        self._ensure_frozen()

        from vanity.server.serve import run_server

        settings = self.server_config
        run_server(
            self,
            settings.host if host is None else host,
            settings.port if port is None else port,
            workers=settings.workers,
            reload=settings.debug,
            log_level=settings.log_level,
            access_log=settings.access_log,
            keep_alive_timeout=settings.keep_alive_timeout,
            request_timeout=settings.request_timeout,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            debug=self.server_config.debug,
        )

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:  # noqa: ARG002
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so a bad entry fails the startup
        instead of the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.critical("Startup failed: %s", exc)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Resolve display/VCS metadata; fails on the first bad entry
        resolved = resolve_config(self.config)

        # 2. Load templates
        env = create_environment(debug=self.server_config.debug)

        # 3. Compile route table, longest prefix first
        router = Router()
        for entry in resolved.paths:
            router.add(
                Route(
                    prefix=entry.prefix,
                    handler=vanity_handler(env, resolved.host, entry),
                    name=entry.repo,
                )
            )
        if not resolved.has_root:
            router.add(
                Route(
                    prefix="/",
                    handler=index_handler(env, resolved.host, resolved.prefixes),
                    exact=True,
                    name="index",
                )
            )
        router.compile()

        # 4. Cache-Control wraps everything so every response carries it
        self._middleware = (CacheControlMiddleware(resolved.max_age), *self._middleware_list)

        self._resolved = resolved
        self._router = router
        self._frozen = True
        logger.info("Compiled %d route(s) for %s", len(router.routes), resolved.host)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Add middleware before calling app.run()."
            )
            raise RuntimeError(msg)
