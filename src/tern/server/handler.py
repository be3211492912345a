"""ASGI handler — translates ASGI scope/messages to tern types.

The only component that touches raw ASGI HTTP messages directly.
Converts the scope to a Request, runs it through the middleware chain
around the route table, and sends the Response back through send().
"""

from collections.abc import Sequence
from typing import Any

from tern._internal.asgi import Receive, Scope, Send
from tern.errors import HTTPError, MethodNotAllowed
from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Middleware, Next
from tern.routing.table import RouteTable
from tern.server.errors import handle_http_error, handle_internal_error
from tern.server.sender import send_response

ALLOWED_METHODS = frozenset({"GET", "HEAD"})


def compose(table: RouteTable, middleware: Sequence[Middleware]) -> Next:
    """Wrap *middleware* (outermost first) around a route table lookup.

    An ``HTTPError`` raised by a link becomes a response before it
    reaches the link outside it, so outer middleware (HEAD handling,
    security headers, compression) still applies to error responses.
    """

    async def dispatch(req: Request) -> Response:
        if req.method not in ALLOWED_METHODS:
            raise MethodNotAllowed(ALLOWED_METHODS)
        return table.lookup(req.path)

    handler: Next = _errors_as_responses(dispatch)
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = _errors_as_responses(make_next)
    return handler


def _errors_as_responses(handler: Next) -> Next:
    async def guarded(req: Request) -> Response:
        try:
            return await handler(req)
        except HTTPError as exc:
            return handle_http_error(exc, req)

    return guarded


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    table: RouteTable,
    middleware: Sequence[Middleware],
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    handler = compose(table, middleware)

    try:
        response = await handler(request)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send)
