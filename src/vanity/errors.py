"""Vanity exception hierarchy.

Shared across config loading, resolution, routing, and the request
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class VanityError(Exception):
    """Base for all vanity-specific errors."""


class ConfigurationError(VanityError):
    """Raised when the vanity configuration is invalid.

    Always raised before the server accepts connections.
    """


class ConfigReadError(ConfigurationError):
    """The configuration file is missing or unreadable."""


class ConfigParseError(ConfigurationError):
    """The configuration document is malformed or has the wrong shape."""


class MetadataResolutionError(ConfigurationError):
    """A path entry's VCS is unknown or cannot be inferred from its repo."""


class ListenError(VanityError):
    """The server could not bind its listening socket."""


@dataclass(frozen=True, slots=True)
class HTTPError(VanityError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no configured prefix covers the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path matched but the method is not served.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
