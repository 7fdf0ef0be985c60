"""Page rendering for the vanity page and the generated index.

Both templates ship inside the package and are loaded through one kida
Environment created when the app freezes. The environment is shared
read-only by every request.
"""

from collections.abc import Iterable

from kida import Environment, PackageLoader

DOCS_URL = "https://godoc.org"
VANITY_TEMPLATE = "vanity.html"
INDEX_TEMPLATE = "index.html"


def create_environment(*, debug: bool = False) -> Environment:
    """Create the kida Environment for the bundled templates.

    Called once during ``App._freeze()``.
    """
    return Environment(
        loader=PackageLoader("vanity.templating", "templates"),
        autoescape=True,
        auto_reload=debug,
    )


def render_vanity_page(
    env: Environment,
    *,
    host: str,
    path: str,
    repo: str,
    display: str,
    vcs: str,
) -> str:
    """Render the page carrying ``go-import`` / ``go-source`` meta tags.

    *path* is the request path; the documentation redirect points at
    ``<host>/<path>`` with the leading slash dropped.
    """
    template = env.get_template(VANITY_TEMPLATE)
    return template.render(
        import_path=host,
        path=path.removeprefix("/"),
        repo=repo,
        display=display,
        vcs=vcs,
        docs_url=DOCS_URL,
    )


def index_import_paths(host: str, prefixes: Iterable[str]) -> list[str]:
    """Return ``host + prefix`` for each prefix, trailing slash stripped, sorted."""
    return sorted((host + prefix).removesuffix("/") for prefix in prefixes)


def render_index_page(env: Environment, *, host: str, import_paths: Iterable[str]) -> str:
    """Render the index listing every configured import path."""
    template = env.get_template(INDEX_TEMPLATE)
    return template.render(host=host, import_paths=list(import_paths), docs_url=DOCS_URL)
