"""Precomputed response descriptors.

Combines a file's final content and its route into an immutable
``Response``. Every header is decided here, once, at startup.

Cache policy by route:

    /          public, must-revalidate     Vary: Accept
    /version   no-cache                    Vary: *
    otherwise  public, max-age=<max_age>   Vary: (empty)

Cache invalidation for assets happens through versioned routes, which
is why every response shares the same ETag (the version tag) and the
same Last-Modified (the build timestamp).
"""

import mimetypes
from email.utils import formatdate

from tern.http.response import Response

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def cache_policy(route: str, max_age: int) -> tuple[str, str]:
    """Return ``(Cache-Control, Vary)`` for *route*."""
    if route == "/":
        return "public, must-revalidate", "Accept"
    if route == "/version":
        return "no-cache", "*"
    return f"public, max-age={max_age}", ""


def content_type_for(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


def http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an RFC 9110 HTTP-date."""
    return formatdate(timestamp, usegmt=True)


def build_response(
    content: bytes,
    route: str,
    *,
    filename: str,
    version: str,
    last_modified: float,
    max_age: int,
) -> Response:
    """Build the 200 response served for *route*."""
    cache_control, vary = cache_policy(route, max_age)
    return Response(
        body=content,
        status=200,
        headers=(
            ("Content-Length", str(len(content))),
            ("Content-Location", route),
            ("Cache-Control", cache_control),
            ("Content-Type", content_type_for(filename)),
            ("ETag", version),
            ("Last-Modified", http_date(last_modified)),
            ("Expires", http_date(last_modified + max_age)),
            ("Vary", vary),
        ),
    )
