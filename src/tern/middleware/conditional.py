"""Conditional GET — answer revalidations with 304 Not Modified.

Compares ``If-None-Match`` against the response's ``ETag`` and
``If-Modified-Since`` against its ``Last-Modified``. When both
validators are present, both must hold.
"""

from email.utils import parsedate_to_datetime

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


async def conditional_get(request: Request, next: Next) -> Response:
    response = await next(request)
    if request.method not in ("GET", "HEAD") or response.status != 200:
        return response
    if not is_fresh(request, response):
        return response
    return not_modified(response)


def not_modified(response: Response) -> Response:
    """The 304 form of *response*: validators and cache headers kept, no body."""
    return (
        response.with_status(304)
        .with_body(b"")
        .without_header("Content-Type", "Content-Length")
    )


def is_fresh(request: Request, response: Response) -> bool:
    """True if the client's cached copy matches *response*."""
    none_match = request.headers.get_list("if-none-match")
    modified_since = request.headers.get("if-modified-since")
    if not none_match and not modified_since:
        return False

    if none_match and not _etag_matches(none_match, response.header("ETag")):
        return False
    if modified_since and not _not_modified_since(modified_since, response.header("Last-Modified")):
        return False
    return True


def _etag_matches(candidates: list[str], etag: str | None) -> bool:
    if etag is None:
        return False
    if "*" in candidates:
        return True
    bare = _bare_etag(etag)
    return any(_bare_etag(candidate) == bare for candidate in candidates)


def _bare_etag(value: str) -> str:
    """Strip the weak prefix and quotes: ``W/"v1"`` → ``v1``."""
    if value.startswith("W/"):
        value = value[2:]
    return value.strip('"')


def _not_modified_since(header: str, last_modified: str | None) -> bool:
    if last_modified is None:
        return False
    try:
        since = parsedate_to_datetime(header)
        modified = parsedate_to_datetime(last_modified)
    except (TypeError, ValueError):
        return False
    if since.tzinfo is None or modified.tzinfo is None:
        return False
    return modified <= since
