"""Security headers middleware — X-XSS-Protection, X-Frame-Options, X-Content-Type-Options.

Anti-XSS and anti-framing headers go on HTML responses only;
``X-Content-Type-Options`` goes on everything, since MIME sniffing is a
risk for scripts and stylesheets too. Headers already present on the
response are left alone.
"""

from dataclasses import dataclass

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class SecurityHeadersConfig:
    """Configuration for security headers.

    All values are applied as-is. Set a field to ``None`` to skip it.
    """

    x_xss_protection: str | None = "1; mode=block"
    x_frame_options: str | None = "SAMEORIGIN"
    x_content_type_options: str | None = "nosniff"


def _is_html_response(response: Response) -> bool:
    return response.content_type.startswith(("text/html", "application/xhtml+xml"))


class SecurityHeadersMiddleware:
    """Add security headers to responses.

    Usage::

        app_pipeline = (SecurityHeadersMiddleware(),)

    Or with custom config::

        SecurityHeadersMiddleware(SecurityHeadersConfig(x_frame_options="DENY"))
    """

    __slots__ = ("config",)

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self.config = config or SecurityHeadersConfig()

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        cfg = self.config

        wanted: list[tuple[str, str | None]] = [
            ("X-Content-Type-Options", cfg.x_content_type_options),
        ]
        if _is_html_response(response):
            wanted.append(("X-XSS-Protection", cfg.x_xss_protection))
            wanted.append(("X-Frame-Options", cfg.x_frame_options))

        for name, value in wanted:
            if value is not None and not response.has_header(name):
                response = response.with_header(name, value)
        return response
