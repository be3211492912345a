"""End-to-end tests: App + TestClient through the full pipeline."""

import gzip
from pathlib import Path

import pytest

from tern import App, AppConfig
from tern.http.response import Response
from tern.middleware import SharedCache
from tern.testing import TestClient


def _app(root: Path, environment: str = "test", **kwargs) -> App:
    return App(
        AppConfig(
            root=root,
            environment=environment,
            settings={"api_endpoint": "https://api.example"},
            **kwargs,
        )
    )


class TestServing:
    async def test_index(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/")
        assert response.status == 200
        assert response.header("content-type") == "text/html"
        assert response.header("etag") == "v42"
        assert response.header("cache-control") == "public, must-revalidate"
        assert b'value="https://api.example"' in response.body
        assert b'href="/v42/styles/app.css"' in response.body

    async def test_unknown_path_gets_index(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            index = await client.get("/")
            deep = await client.get("/travis-ci/travis-web/builds/123")
        assert deep.status == 200
        assert deep.body == index.body
        assert deep.header("content-location") == "/"

    async def test_versioned_asset(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/v42/styles/app.css")
            unversioned = await client.get("/styles/app.css")
        assert response.body == b"body { color: red; }"
        assert response.header("cache-control") == "public, max-age=31536000"
        assert response.header("x-content-type-options") == "nosniff"
        assert response.header("x-frame-options") is None
        # only the versioned route exists; the bare path falls back to the index
        assert unversioned.header("content-location") == "/"

    async def test_index_security_headers(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/")
        assert response.header("x-xss-protection") == "1; mode=block"
        assert response.header("x-frame-options") == "SAMEORIGIN"

    async def test_nested_index(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/docs/")
        assert response.body.startswith(b"<h1>Docs</h1>")

    async def test_version_route(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/version")
        assert response.body == b"v42\n"
        assert response.header("cache-control") == "no-cache"
        assert response.header("vary") == "*"

    async def test_every_header_sent_once(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/", headers={"Accept-Encoding": "gzip"})
        names = [name for name, _ in response.headers]
        assert len(names) == len(set(names))
        assert names.count("content-location") == 1


class TestHead:
    async def test_head_has_headers_but_no_body(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            get = await client.get("/images/logo.png")
            head = await client.head("/images/logo.png")
        assert head.status == 200
        assert head.body == b""
        assert head.header("content-length") == get.header("content-length") == "8"
        assert head.header("etag") == "v42"


class TestMethods:
    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
    async def test_other_methods_rejected(self, site: Path, method: str) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.request(method, "/")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD"
        assert response.header("x-content-type-options") == "nosniff"


class TestCompression:
    async def test_gzip(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            plain = await client.get("/")
            compressed = await client.get("/", headers={"Accept-Encoding": "gzip, br"})
        assert compressed.header("content-encoding") == "gzip"
        assert gzip.decompress(compressed.body) == plain.body
        assert compressed.header("content-length") == str(len(compressed.body))
        assert compressed.header("vary") == "Accept, Accept-Encoding"
        assert plain.header("vary") == "Accept, Accept-Encoding"

    async def test_min_size(self, site: Path) -> None:
        async with TestClient(_app(site, compression_min_size=1_000_000)) as client:
            response = await client.get("/", headers={"Accept-Encoding": "gzip"})
        assert response.header("content-encoding") is None


class TestConditional:
    async def test_etag_revalidation(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/v42/scripts/app.js", headers={"If-None-Match": "v42"})
        assert response.status == 304
        assert response.body == b""
        assert response.header("content-type") is None
        assert response.header("content-length") is None
        assert response.header("etag") == "v42"

    async def test_last_modified_revalidation(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            first = await client.get("/")
            again = await client.get("/", headers={"If-Modified-Since": first.header("last-modified")})
        assert again.status == 304

    async def test_old_version_gets_full_body(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/", headers={"If-None-Match": "v41"})
        assert response.status == 200
        assert response.body


class TestTraversal:
    async def test_dot_dot_rejected(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/styles/../../etc/passwd")
        assert response.status == 403
        assert response.header("content-type") == "text/plain; charset=utf-8"
        assert response.header("x-content-type-options") == "nosniff"

    async def test_head_rejection_has_no_body(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.head("/styles/../../etc/passwd")
        assert response.status == 403
        assert response.body == b""
        assert int(response.header("content-length")) > 0


class TestProduction:
    async def test_http_redirected(self, site: Path) -> None:
        async with TestClient(_app(site, "production")) as client:
            response = await client.get("/builds/1")
        assert response.status == 301
        assert response.header("location") == "https://testserver/builds/1"

    async def test_https_served_with_hsts(self, site: Path) -> None:
        async with TestClient(_app(site, "production")) as client:
            response = await client.get("/", scheme="https")
        assert response.status == 200
        assert response.header("strict-transport-security") == "max-age=31536000"

    async def test_shared_cache(self, site: Path) -> None:
        async with TestClient(_app(site, "production")) as client:
            first = await client.get("/images/logo.png", scheme="https")
            second = await client.get("/images/logo.png", scheme="https")
        assert first.header("x-cache") == "miss, store"
        assert second.header("x-cache") == "fresh"
        assert second.header("age") is not None
        assert second.body == first.body

    async def test_version_route_never_cached(self, site: Path) -> None:
        async with TestClient(_app(site, "production")) as client:
            await client.get("/version", scheme="https")
            response = await client.get("/version", scheme="https")
        assert response.header("x-cache") == "miss"

    async def test_cache_keeps_gzip_variant(self, site: Path) -> None:
        gzip_headers = {"Accept-Encoding": "gzip"}
        async with TestClient(_app(site, "production")) as client:
            await client.get("/v42/scripts/app.js", scheme="https", headers=gzip_headers)
            compressed = await client.get("/v42/scripts/app.js", scheme="https", headers=gzip_headers)
            plain = await client.get("/v42/scripts/app.js", scheme="https")
        assert compressed.header("x-cache") == "fresh"
        assert compressed.header("content-encoding") == "gzip"
        assert plain.header("x-cache") == "miss, store"
        assert plain.body == b"console.log('hello');"


    async def test_cache_bounded_across_accept_variants(self, site: Path) -> None:
        app = _app(site, "production", cache_max_entries=5)
        async with TestClient(app) as client:
            for n in range(50):
                await client.get("/", scheme="https", headers={"Accept": f"text/x-{n}"})
        cache = next(mw for mw in app.middleware if isinstance(mw, SharedCache))
        assert len(cache) == 5


class TestMobile:
    async def test_redirect(self, site: Path) -> None:
        app = _app(site, mobile_redirect_url="https://m.example.com")
        async with TestClient(app) as client:
            response = await client.get("/repos", headers={"User-Agent": "Android Mobile"})
        assert response.status == 302
        assert response.header("location") == "https://m.example.com/repos"


class TestFreeze:
    def test_add_middleware_after_freeze(self, site: Path) -> None:
        app = _app(site)
        app.table  # noqa: B018
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.add_middleware(lambda request, next: next(request))

    def test_table_built_once(self, site: Path) -> None:
        app = _app(site)
        assert app.table is app.table

    def test_reloader_only_in_development(self, site: Path) -> None:
        dev = App(AppConfig(root=site, reload=True))
        prod = App(AppConfig(root=site, environment="production", reload=True))
        dev.table  # noqa: B018
        prod.table  # noqa: B018
        assert dev._reloader is not None
        assert prod._reloader is None

    async def test_custom_middleware_runs_inside_pipeline(self, site: Path) -> None:
        app = _app(site)

        async def tag(request, next):
            response = await next(request)
            return response.with_header("X-Tag", "yes")

        app.add_middleware(tag)
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.header("x-tag") == "yes"

    async def test_middleware_error_becomes_500(self, site: Path) -> None:
        app = _app(site)

        async def broken(request, next) -> Response:
            raise RuntimeError("boom")

        app.add_middleware(broken)
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.body == b"Internal Server Error"


class TestLifespan:
    async def _run(self, app: App) -> list[dict]:
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive() -> dict:
            return incoming.pop(0)

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        return sent

    async def test_startup_and_shutdown(self, site: Path) -> None:
        sent = await self._run(_app(site))
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure_reported(self, tmp_path: Path) -> None:
        sent = await self._run(_app(tmp_path / "missing"))
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "version" in sent[0]["message"]

    async def test_reloader_stopped_on_shutdown(self, site: Path) -> None:
        app = App(AppConfig(root=site, reload=True, reload_interval=0.01))
        sent = await self._run(app)
        assert sent[-1]["type"] == "lifespan.shutdown.complete"
