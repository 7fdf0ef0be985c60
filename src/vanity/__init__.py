"""Vanity — serve vanity import pages from a YAML config.

Maps URL path prefixes to source repositories and answers with small
HTML pages carrying ``go-import`` / ``go-source`` meta tags plus a
redirect to the package documentation.

Basic usage::

    from vanity import App

    app = App.from_file("vanity.yml")
    app.run()

Or from the command line::

    vanity run --config vanity.yml
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "HTTPError",
    "ListenError",
    "MetadataResolutionError",
    "NotFound",
    "PathEntry",
    "Request",
    "Response",
    "ServerConfig",
    "VanityConfig",
    "VanityError",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import vanity`` fast while providing a clean top-level API.
    """
    if name == "App":
        from vanity.app import App

        return App

    if name in ("PathEntry", "ServerConfig", "VanityConfig", "load_config"):
        from vanity import config as _config

        return getattr(_config, name)

    if name == "Request":
        from vanity.http.request import Request

        return Request

    if name == "Response":
        from vanity.http.response import Response

        return Response

    if name in (
        "ConfigurationError",
        "HTTPError",
        "ListenError",
        "MetadataResolutionError",
        "NotFound",
        "VanityError",
    ):
        from vanity import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
