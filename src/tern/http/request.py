"""Immutable HTTP request.

Frozen metadata only. Tern never reads request bodies: every response
is precomputed, so the request is honest about what matters — method,
path, headers, and where it came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tern.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    scheme: str = "http"
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def is_secure(self) -> bool:
        """True if the request arrived over TLS (directly or via a proxy)."""
        forwarded = self.headers.get("x-forwarded-proto")
        if forwarded:
            return forwarded.split(",")[0].strip().lower() == "https"
        return self.scheme in ("https", "wss")

    @property
    def host(self) -> str:
        """The Host header, falling back to the ASGI server address."""
        host = self.headers.get("host")
        if host:
            return host
        if self.server is not None:
            name, port = self.server
            return name if port in (80, 443) else f"{name}:{port}"
        return "localhost"

    @property
    def url(self) -> str:
        """Request target (path + query string)."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
