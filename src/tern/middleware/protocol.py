"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. Each link either answers the request itself or
forwards it to ``next`` and transforms what comes back; responses are
immutable, so transformations go through ``.with_*()``.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from tern.http.request import Request
from tern.http.response import Response

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for tern middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def server_name(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("Server", "tern")

        # Class middleware
        class Maintenance:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
