"""Tern exception hierarchy.

Shared across the content build, the route table, the middleware
pipeline, and the ASGI handler so every module raises and catches the
same types.
"""

from dataclasses import dataclass


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when the app configuration or content tree is unusable.

    Always fatal: surfaced while the route table is built, before the
    server accepts a single request.
    """


class RouteCollisionError(ConfigurationError):
    """Two files in the content tree derive the same route."""

    def __init__(self, route: str, first: str, second: str) -> None:
        self.route = route
        self.first = first
        self.second = second
        super().__init__(f"Route {route!r} is produced by both {first!r} and {second!r}")


class ContentError(TernError):
    """Raised when the content tree cannot be read.

    Covers a missing root, a missing or empty ``version`` file, and
    unreadable files.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(TernError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or the route table lookup. The ASGI handler
    catches these and turns them into a plain-text response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the request path is not acceptable."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — only the listed methods are served.

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
