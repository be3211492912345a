"""Shared fixtures: a small but complete content tree."""

from pathlib import Path

import pytest

from tern.http.headers import Headers
from tern.http.request import Request
from tern.testing import make_site


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A content tree with an index, versioned assets, a spec page, and nested pages."""
    return make_site(
        tmp_path / "public",
        {
            "styles/app.css": "body { color: red; }",
            "scripts/app.js": "console.log('hello');",
            "images/logo.png": b"\x89PNG\r\n\x1a\n",
            "docs/index.html": '<h1>Docs</h1><script src="scripts/docs.js"></script>',
            "spec.html": '<meta rel="travis.api_endpoint" href="https://api.default.example">',
            "data.bin": b"\x00\x01\x02\x03",
        },
        version="v42",
    )


def make_request(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    *,
    scheme: str = "http",
    query_string: bytes = b"",
) -> Request:
    merged = {"host": "testserver"}
    merged.update({name.lower(): value for name, value in (headers or {}).items()})
    return Request(
        method=method,
        path=path,
        headers=Headers.from_dict(merged),
        query_string=query_string,
        scheme=scheme,
        server=("testserver", 80),
    )
