"""Integration tests: config → App → TestClient round trips."""

import pytest

from vanity.app import App
from vanity.config import PathEntry, ServerConfig, VanityConfig, parse_config
from vanity.errors import MetadataResolutionError
from vanity.http.request import Request
from vanity.http.response import Response
from vanity.middleware.protocol import Next
from vanity.testing import TestClient

CONFIG = """\
host: go.example.com
paths:
  /tool:
    repo: https://github.com/example/tool
  /tool/plugins:
    repo: https://bitbucket.org/example/plugins
  /legacy/:
    repo: https://svn.example.com/legacy
    vcs: svn
    display: "https://svn.example.com/legacy _ _"
"""


def _make_app(source: str = CONFIG) -> App:
    return App(parse_config(source))


class TestVanityPages:
    @pytest.mark.parametrize(
        ("path", "vcs", "repo"),
        [
            ("/tool", "git", "https://github.com/example/tool"),
            ("/tool/sub/path", "git", "https://github.com/example/tool"),
            ("/tool/plugins/x", "git", "https://bitbucket.org/example/plugins"),
            ("/legacy/sub/path", "svn", "https://svn.example.com/legacy"),
            ("/legacy", "svn", "https://svn.example.com/legacy"),
        ],
    )
    async def test_go_import(self, path: str, vcs: str, repo: str) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get(path)
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert f'<meta name="go-import" content="go.example.com {vcs} {repo}">' in response.text

    async def test_longest_prefix_wins(self) -> None:
        source = """\
host: h
paths:
  /a:
    repo: https://github.com/org/a
  /a/b:
    repo: https://github.com/org/b
"""
        async with TestClient(_make_app(source)) as client:
            response = await client.get("/a/b/x")
        assert "https://github.com/org/b" in response.text
        assert "https://github.com/org/a" not in response.text

    async def test_redirect_to_docs(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/tool/cmd/tool")
        assert "url=https://godoc.org/go.example.com/tool/cmd/tool" in response.text

    async def test_go_source_display(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/tool")
        assert (
            "go.example.com https://github.com/example/tool "
            "https://github.com/example/tool/tree/master{/dir}"
        ) in response.text

    async def test_query_string_ignored(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/tool?go-get=1")
        assert response.status == 200
        assert "url=https://godoc.org/go.example.com/tool\"" in response.text

    async def test_head(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.head("/tool")
        assert response.status == 200
        assert response.body == b""
        assert int(response.header("content-length") or 0) > 0


class TestIndex:
    async def test_generated_index(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/")
        assert response.status == 200
        text = response.text
        expected = [
            "go.example.com/legacy",
            "go.example.com/tool",
            "go.example.com/tool/plugins",
        ]
        positions = [text.index(f">{path}</a>") for path in expected]
        assert positions == sorted(positions)
        assert "go.example.com/legacy/" not in text

    async def test_configured_root_replaces_index(self) -> None:
        source = "host: h\npaths:\n  /:\n    repo: https://github.com/org/root\n"
        async with TestClient(_make_app(source)) as client:
            root = await client.get("/")
            sub = await client.get("/anything")
        assert 'content="h git https://github.com/org/root"' in root.text
        assert 'content="h git https://github.com/org/root"' in sub.text

    async def test_empty_paths_index(self) -> None:
        async with TestClient(_make_app("host: h\n")) as client:
            response = await client.get("/")
        assert response.status == 200
        assert "<h1>h</h1>" in response.text


class TestNotFound:
    async def test_unmatched_path(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/unknown/pkg")
        assert response.status == 404

    async def test_sibling_of_prefix(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/toolbox")
        assert response.status == 404

    async def test_method_not_allowed(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.post("/tool")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD"


class TestCacheControl:
    @pytest.mark.parametrize("path", ["/tool/x", "/", "/missing"])
    async def test_default_max_age(self, path: str) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get(path)
        assert response.header("cache-control") == "public, max-age=86400"

    async def test_configured_max_age(self) -> None:
        source = "host: h\nmax_age: 300\npaths:\n  /a:\n    repo: https://github.com/o/a\n"
        async with TestClient(_make_app(source)) as client:
            response = await client.get("/a")
        assert response.header("cache-control") == "public, max-age=300"


class TestStartupFailures:
    async def test_unsupported_vcs(self) -> None:
        source = "host: h\npaths:\n  /a:\n    repo: https://cvs.example.com/a\n    vcs: cvs\n"
        with pytest.raises(MetadataResolutionError, match="https://cvs.example.com/a"):
            async with TestClient(_make_app(source)):
                pass

    async def test_cannot_infer_vcs(self) -> None:
        source = "host: h\npaths:\n  /a:\n    repo: https://code.example.com/a\n"
        with pytest.raises(MetadataResolutionError, match="cannot infer VCS"):
            async with TestClient(_make_app(source)):
                pass

    def test_failed_freeze_can_be_retried(self) -> None:
        app = _make_app("host: h\npaths:\n  /a:\n    repo: https://code.example.com/a\n")
        for _ in range(2):
            with pytest.raises(MetadataResolutionError):
                _ = app.router


class TestAppSetup:
    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "vanity.yml"
        path.write_text(CONFIG)
        app = App.from_file(path, ServerConfig(port=4000))
        assert app.config.host == "go.example.com"
        assert app.server_config.port == 4000

    def test_resolved_config(self) -> None:
        app = App(VanityConfig(host="h", paths=(PathEntry("/a", "https://github.com/o/a"),)))
        assert app.resolved.paths[0].vcs == "git"

    def test_router_includes_index(self) -> None:
        app = _make_app()
        assert [route.prefix for route in app.router.routes] == [
            "/tool/plugins",
            "/legacy/",
            "/tool",
            "/",
        ]

    def test_add_middleware_after_freeze(self) -> None:
        app = _make_app()
        _ = app.router
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.add_middleware(lambda request, next: next(request))

    async def test_user_middleware_runs_inside_cache_control(self) -> None:
        seen: list[str] = []

        async def record(request: Request, next: Next) -> Response:
            seen.append(request.path)
            response = await next(request)
            return response.with_header("Cache-Control", "no-store")

        app = _make_app()
        app.add_middleware(record)
        async with TestClient(app) as client:
            response = await client.get("/tool")
        assert seen == ["/tool"]
        assert response.header("cache-control") == "public, max-age=86400"

    async def test_handler_exception_is_500(self) -> None:
        async def boom(request: Request, next: Next) -> Response:
            raise RuntimeError("boom")

        app = _make_app()
        app.add_middleware(boom)
        async with TestClient(app) as client:
            response = await client.get("/tool")
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert response.header("cache-control") == "public, max-age=86400"

    async def test_middleware_sees_not_found_response(self) -> None:
        statuses: list[int] = []

        async def record(request: Request, next: Next) -> Response:
            response = await next(request)
            statuses.append(response.status)
            return response

        app = _make_app()
        app.add_middleware(record)
        async with TestClient(app) as client:
            await client.get("/missing")
            await client.post("/tool")
        assert statuses == [404, 405]

    async def test_failing_handler_keeps_outer_middleware(self) -> None:
        seen: list[int] = []

        async def outer(request: Request, next: Next) -> Response:
            response = await next(request)
            seen.append(response.status)
            return response

        async def inner(request: Request, next: Next) -> Response:
            raise LookupError("inner")

        app = _make_app()
        app.add_middleware(outer)
        app.add_middleware(inner)
        async with TestClient(app) as client:
            response = await client.get("/tool")
        assert seen == [500]
        assert response.status == 500
        assert response.header("cache-control") == "public, max-age=86400"


class TestLifespan:
    async def _run_lifespan(self, app: App) -> list[dict]:
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict] = []

        async def receive() -> dict:
            return next(messages)

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        return sent

    async def test_startup_and_shutdown(self) -> None:
        sent = await self._run_lifespan(_make_app())
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure(self) -> None:
        app = _make_app("host: h\npaths:\n  /a:\n    repo: https://code.example.com/a\n")
        sent = await self._run_lifespan(app)
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "cannot infer VCS" in sent[0]["message"]
