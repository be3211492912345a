"""User-agent redirect to a separate mobile site."""

import re

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


class MobileRedirect:
    """Send mobile browsers to *target* with the same path and query.

    Only GET requests are redirected. Matching is a regex search over
    the User-Agent header.
    """

    __slots__ = ("_pattern", "target")

    def __init__(self, target: str, user_agents: str = r"Mobile|webOS") -> None:
        self.target = target.rstrip("/")
        self._pattern = re.compile(user_agents)

    def is_mobile(self, request: Request) -> bool:
        user_agent = request.headers.get("user-agent") or ""
        return bool(self._pattern.search(user_agent))

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method != "GET" or not self.is_mobile(request):
            return await next(request)
        location = f"{self.target}{request.url}"
        return Response.plain(f"Redirecting to {location}", status=302).with_header(
            "Location", location
        )
