"""The standard request pipeline, assembled per environment.

Outermost first::

    ForceSSL                  production only
    SharedCache               production only
    MobileRedirect            when a mobile site is configured
    Deflate                   always
    head_request              always
    SecurityHeadersMiddleware always
    reject_traversal          always
    conditional_get           always
    → RouteTable.lookup
"""

from tern.config import AppConfig
from tern.middleware.cache import SharedCache
from tern.middleware.compression import Deflate
from tern.middleware.conditional import conditional_get
from tern.middleware.head import head_request
from tern.middleware.mobile import MobileRedirect
from tern.middleware.protocol import Middleware
from tern.middleware.security_headers import SecurityHeadersMiddleware
from tern.middleware.ssl import ForceSSL
from tern.middleware.traversal import reject_traversal


def build_pipeline(config: AppConfig) -> tuple[Middleware, ...]:
    """Return the middleware chain for *config*, outermost first."""
    chain: list[Middleware] = []
    if config.is_production:
        chain.append(ForceSSL(config.hsts_max_age))
        chain.append(SharedCache(config.cache_max_entries))
    if config.mobile_redirect_url:
        chain.append(MobileRedirect(config.mobile_redirect_url, config.mobile_user_agents))
    chain.extend(
        (
            Deflate(min_size=config.compression_min_size),
            head_request,
            SecurityHeadersMiddleware(),
            reject_traversal,
            conditional_get,
        )
    )
    return tuple(chain)
