"""TLS enforcement — redirect plain HTTP to HTTPS, add HSTS.

Production only. TLS itself terminates in the server or a proxy in
front of it; this middleware just makes sure clients end up there.
"""

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


class ForceSSL:
    """Redirect insecure requests to ``https://`` and mark secure ones with HSTS.

    GET and HEAD are redirected with 301; any other method with 307 so
    the client repeats it unchanged. ``X-Forwarded-Proto`` is honoured
    for deployments behind a TLS-terminating proxy.
    """

    __slots__ = ("hsts",)

    def __init__(self, hsts_max_age: int, *, include_subdomains: bool = False) -> None:
        hsts = f"max-age={hsts_max_age}"
        if include_subdomains:
            hsts += "; includeSubDomains"
        self.hsts = hsts

    async def __call__(self, request: Request, next: Next) -> Response:
        if not request.is_secure:
            location = f"https://{_strip_port(request.host)}{request.url}"
            status = 301 if request.method in ("GET", "HEAD") else 307
            return Response.plain(f"Redirecting to {location}", status=status).with_header(
                "Location", location
            )

        response = await next(request)
        if response.has_header("Strict-Transport-Security"):
            return response
        return response.with_header("Strict-Transport-Security", self.hsts)


def _strip_port(host: str) -> str:
    """Drop an explicit port; the redirect target is the default HTTPS port."""
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    return host.split(":", 1)[0]
