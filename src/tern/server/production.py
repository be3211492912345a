"""Production server.

Starts a multi-worker pounce server. Every worker shares the same
frozen route table: nothing is mutated after startup, so no locking is
needed on the request path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tern.app import App


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 8000,
    workers: int = 0,  # 0 = auto-detect from CPU count
    *,
    log_level: str = "info",
    log_format: str = "json",
    max_connections: int = 1000,
    backlog: int = 2048,
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
    ssl_certfile: str | None = None,
    ssl_keyfile: str | None = None,
) -> None:
    """Run a tern app in production mode.

    Args:
        app: Tern App instance. Must already be frozen so a broken
            content tree aborts before any socket is bound.
        host: Bind address (default: 0.0.0.0 for all interfaces).
        port: Bind port (default: 8000).
        workers: Worker count (0 = auto-detect from CPU count).
        log_level: Log level (debug, info, warning, error, critical).
        log_format: Log format ("json" or "text").
        max_connections: Maximum concurrent connections.
        backlog: TCP listen backlog.
        keep_alive_timeout: Keep-alive connection timeout (seconds).
        request_timeout: Individual request timeout (seconds).
        ssl_certfile: Path to TLS certificate file (enables HTTPS).
        ssl_keyfile: Path to TLS private key file.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
        log_format=log_format,
        max_connections=max_connections,
        backlog=backlog,
        keep_alive_timeout=keep_alive_timeout,
        request_timeout=request_timeout,
        ssl_certfile=ssl_certfile,
        ssl_keyfile=ssl_keyfile,
    )
    server = Server(config, app)
    server.run()
