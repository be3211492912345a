"""Async test client for tern applications.

Uses the same Response type as production. Requests go through the
ASGI interface directly — no sockets involved.
"""

from __future__ import annotations

from typing import Any

from tern.app import App
from tern.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for tern applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.header("etag") == "v1"
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        scheme: str = "http",
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers, scheme=scheme)

    async def head(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        scheme: str = "http",
    ) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers, scheme=scheme)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        scheme: str = "http",
    ) -> Response:
        """Send an arbitrary request through the ASGI app.

        Response headers come back exactly as sent over ASGI, names
        lowercased, ``content-length`` included.
        """
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        raw_headers: list[tuple[bytes, bytes]] = [(b"host", b"testserver")]
        for name, value in (headers or {}).items():
            lowered = name.lower().encode("latin-1")
            raw_headers = [(k, v) for k, v in raw_headers if k != lowered]
            raw_headers.append((lowered, value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": scheme,
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 443 if scheme == "https" else 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            headers=tuple(
                (name.decode("latin-1"), value.decode("latin-1"))
                for name, value in response_headers
            ),
        )
