"""Compiled router with longest-prefix matching.

Routes are registered during setup and compiled into an immutable
lookup table when the app freezes.
"""

from vanity.errors import ConfigurationError, MethodNotAllowed, NotFound
from vanity.routing.route import Route, RouteMatch


def route_order(route: Route) -> tuple[int, str]:
    """Sort key: longest configured prefix first, ties broken lexically."""
    return (-len(route.prefix), route.prefix)


class Router:
    """Ordered prefix router.

    Usage::

        router = Router()
        router.add(Route("/tool", tool_page))
        router.add(Route("/tool/sub", sub_page))
        router.compile()
        match = router.match("GET", "/tool/sub/pkg")  # -> /tool/sub

    Matching walks the compiled table in order and returns the first
    route that covers the path, so a more specific prefix always wins
    over a shorter ancestor.
    """

    __slots__ = ("_compiled", "_pending", "_table")

    def __init__(self) -> None:
        self._pending: list[Route] = []
        self._table: tuple[Route, ...] = ()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        for existing in self._pending:
            if existing.exact == route.exact and existing.key == route.key:
                msg = f"Route {route.prefix!r} duplicates {existing.prefix!r}"
                raise ConfigurationError(msg)
        self._pending.append(route)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, in match order once compiled."""
        if self._compiled:
            return list(self._table)
        return list(self._pending)

    def compile(self) -> None:
        """Sort and freeze the table. No more routes can be added."""
        self._table = tuple(sorted(self._pending, key=route_order))
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against the compiled table.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route covers the path.
        Raises ``MethodNotAllowed`` if the covering route does not serve *method*.
        """
        if not self._compiled:
            msg = "Router must be compiled before matching."
            raise RuntimeError(msg)

        for route in self._table:
            if not route.matches(path):
                continue
            if method not in route.methods:
                raise MethodNotAllowed(route.methods)
            subpath = "" if route.exact else path[len(route.key) :].lstrip("/")
            return RouteMatch(route=route, subpath=subpath)

        raise NotFound(f"No route matches {method} {path!r}")
