"""Development server.

Starts a pounce ASGI server with the live tern App object, single
worker. Content changes are picked up by the app's own table reloader
(see ``tern.server.reload``), not by restarting the process.
"""

from __future__ import annotations


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "debug",
) -> None:
    """Start a pounce dev server with the given tern App.

    Args:
        app: ASGI callable (tern App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Server log level.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
