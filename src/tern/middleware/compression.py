"""Response compression — gzip bodies for clients that accept it.

Compression happens per request on the precomputed body. In production
the shared cache sits in front of this middleware and keeps the
compressed variants, so each one is produced once.
"""

import gzip

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


def _accepts_gzip(request: Request) -> bool:
    """True if Accept-Encoding allows gzip, explicitly or through ``*``.

    An explicit ``gzip`` entry wins over ``*`` regardless of order, so
    ``gzip;q=0, *`` refuses gzip.
    """
    qualities: dict[str, float] = {}
    for member in request.headers.get_list("accept-encoding"):
        coding, _, params = member.partition(";")
        qualities[coding.strip().lower()] = _quality(params)
    if "gzip" in qualities:
        return qualities["gzip"] > 0
    return qualities.get("*", 0) > 0


def _quality(params: str) -> float:
    for param in params.split(";"):
        name, _, value = param.strip().partition("=")
        if name.lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def _body_allowed(status: int) -> bool:
    return not (100 <= status < 200 or status in {204, 304})


def _append_vary(vary: str | None, value: str) -> str:
    if not vary:
        return value
    if vary.strip() == "*":
        return vary
    members = [member.strip() for member in vary.split(",") if member.strip()]
    if value.lower() in (member.lower() for member in members):
        return vary
    return ", ".join([*members, value])


class Deflate:
    """Gzip response bodies.

    Skipped for HEAD requests, bodiless statuses, bodies smaller than
    *min_size*, responses that already carry a ``Content-Encoding``, and
    responses marked ``Cache-Control: no-transform``.
    """

    __slots__ = ("level", "min_size")

    def __init__(self, *, min_size: int = 0, level: int = 6) -> None:
        self.min_size = min_size
        self.level = level

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        vary = response.header("Vary")
        if _body_allowed(response.status) and request.method != "HEAD":
            # The representation depends on Accept-Encoding whether or not
            # this particular client gets the compressed one.
            response = response.with_header("Vary", _append_vary(vary, "Accept-Encoding"))

        if not self._should_compress(request, response):
            return response

        body = gzip.compress(response.body, compresslevel=self.level, mtime=0)
        return (
            response.with_body(body)
            .with_header("Content-Encoding", "gzip")
            .with_header("Content-Length", str(len(body)))
        )

    def _should_compress(self, request: Request, response: Response) -> bool:
        if request.method == "HEAD" or not _body_allowed(response.status):
            return False
        if not response.body or len(response.body) < self.min_size:
            return False
        encoding = response.header("Content-Encoding")
        if encoding and encoding.lower() != "identity":
            return False
        if "no-transform" in (response.header("Cache-Control") or ""):
            return False
        return _accepts_gzip(request)
