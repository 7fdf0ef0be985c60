"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass

from vanity.http.request import Request
from vanity.http.response import Response

# Vanity pages are read-only
READ_METHODS: frozenset[str] = frozenset({"GET", "HEAD"})


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    A prefix route for ``/tool`` serves ``/tool`` itself and everything
    under ``/tool/``. An exact route serves only its own path.
    """

    prefix: str
    handler: Callable[[Request], Response]
    methods: frozenset[str] = READ_METHODS
    exact: bool = False
    name: str | None = None

    @property
    def key(self) -> str:
        """The prefix with one trailing slash trimmed."""
        if self.exact:
            return self.prefix
        return self.prefix.removesuffix("/")

    def matches(self, path: str) -> bool:
        """True if this route serves *path*."""
        if self.exact:
            return path == self.prefix
        key = self.key
        if key and path == key:
            return True
        return path.startswith(key + "/")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``subpath`` is the part of the request path below the prefix,
    without a leading slash.
    """

    route: Route
    subpath: str
