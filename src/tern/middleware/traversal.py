"""Path traversal rejection.

Route lookup is an exact dictionary match, so a ``..`` path can never
reach the filesystem. Rejecting it anyway keeps such probes out of
caches and logs a clear 403 instead of silently serving the index.
"""

from urllib.parse import unquote

from tern.errors import Forbidden
from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next

_FORBIDDEN_SEGMENTS = frozenset({"..", "."})


def is_traversal(path: str) -> bool:
    """True if *path* (raw or percent-decoded) escapes or obscures its directory."""
    for candidate in {path, unquote(path)}:
        if "\\" in candidate or "\x00" in candidate:
            return True
        if any(segment in _FORBIDDEN_SEGMENTS for segment in candidate.split("/")):
            return True
    return False


async def reject_traversal(request: Request, next: Next) -> Response:
    if is_traversal(request.path):
        raise Forbidden(f"Path not allowed: {request.path}")
    return await next(request)
