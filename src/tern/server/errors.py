"""Error handling for tern requests.

Maps HTTPError exceptions and unexpected failures to plain-text
responses. Route lookup itself never fails; errors come from the
pipeline (path traversal, disallowed methods) or from bugs.
"""

import logging

from tern.errors import HTTPError
from tern.http.request import Request
from tern.http.response import Response

logger = logging.getLogger("tern.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    response = Response.plain(exc.detail or f"Error {exc.status}", status=exc.status)
    return response.with_headers(dict(exc.headers))


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    return Response.plain("Internal Server Error", status=500)
