"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    ForceSSL -- Redirect plain HTTP to HTTPS, add Strict-Transport-Security
    SharedCache -- In-process shared HTTP cache honouring Cache-Control/Vary
    MobileRedirect -- Send mobile user agents to a separate site
    Deflate -- Gzip response bodies
    head_request -- Strip bodies from HEAD responses
    SecurityHeadersMiddleware -- X-XSS-Protection, X-Frame-Options, X-Content-Type-Options
    reject_traversal -- 403 for paths containing ``..`` segments
    conditional_get -- 304 Not Modified for matching If-None-Match / If-Modified-Since
"""

from tern.middleware.cache import SharedCache
from tern.middleware.compression import Deflate
from tern.middleware.conditional import conditional_get
from tern.middleware.head import head_request
from tern.middleware.mobile import MobileRedirect
from tern.middleware.pipeline import build_pipeline
from tern.middleware.protocol import Middleware, Next
from tern.middleware.security_headers import (
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
)
from tern.middleware.ssl import ForceSSL
from tern.middleware.traversal import reject_traversal

__all__ = [
    "Deflate",
    "ForceSSL",
    "Middleware",
    "MobileRedirect",
    "Next",
    "SecurityHeadersConfig",
    "SecurityHeadersMiddleware",
    "SharedCache",
    "build_pipeline",
    "conditional_get",
    "head_request",
    "reject_traversal",
]
