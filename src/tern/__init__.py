"""Tern — serve a pre-built single-page app with precomputed responses.

Every file under the content root is read once at startup, rewritten
where needed, and turned into an immutable HTTP response. Requests are
answered by exact-path lookup, with the index page as the catch-all.

Basic usage::

    from tern import App, AppConfig

    app = App(AppConfig(root="public", settings={"api_endpoint": "https://api.example"}))
    app.run()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "ContentError",
    "HTTPError",
    "Request",
    "Response",
    "RouteTable",
    "TernError",
    "build_route_table",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tern.app import App

        return App

    if name == "AppConfig":
        from tern.config import AppConfig

        return AppConfig

    if name == "Request":
        from tern.http.request import Request

        return Request

    if name == "Response":
        from tern.http.response import Response

        return Response

    if name in ("RouteTable", "build_route_table"):
        import tern.routing

        return getattr(tern.routing, name)

    if name in ("TernError", "ConfigurationError", "ContentError", "HTTPError"):
        import tern.errors

        return getattr(tern.errors, name)

    msg = f"module 'tern' has no attribute {name!r}"
    raise AttributeError(msg)
