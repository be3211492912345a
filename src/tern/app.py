"""Tern application class.

Configured at construction, frozen on first use: the route table is
built and the middleware chain fixed exactly once, before the first
request is answered.
"""

import threading
from typing import Any

import anyio

from tern._internal.asgi import Receive, Scope, Send
from tern.config import AppConfig
from tern.middleware.pipeline import build_pipeline
from tern.middleware.protocol import Middleware
from tern.routing.builder import build_route_table
from tern.routing.table import RouteTable
from tern.server.handler import handle_request
from tern.server.reload import TableReloader


class App:
    """The tern application.

    Usage::

        app = App(AppConfig(root="dist", environment="production"))

    ``App`` is an ASGI 3 callable; hand it to any ASGI server, or call
    ``app.run()`` to start pounce.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the route table, even if several workers call
        ``__call__()`` concurrently on first request. After that the
        table is only ever read. In development with ``reload`` enabled
        the reloader replaces ``_table`` with a whole new table in one
        assignment; readers never observe a partially built one.
    """

    __slots__ = (
        "_extra_middleware",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_reloader",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._extra_middleware: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._table: RouteTable | None = None
        self._middleware: tuple[Middleware, ...] = ()
        self._reloader: TableReloader | None = None

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware inside the standard pipeline, just before route lookup."""
        self._check_not_frozen()
        self._extra_middleware.append(middleware)

    @property
    def table(self) -> RouteTable:
        """The active route table. Builds it on first access."""
        self._ensure_frozen()
        assert self._table is not None
        return self._table

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        self._ensure_frozen()
        return self._middleware

    def build_table(self) -> RouteTable:
        """Build a fresh route table from the configured content root."""
        return build_route_table(
            self.config.root,
            settings=self.config.settings,
            max_age=self.config.max_age,
        )

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Build the route table, then start serving.

        Startup errors (missing root, missing version file, no index
        page, route collisions) propagate from here before any socket
        is opened.
        """
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port

        if self.config.is_production:
            from tern.server.production import run_production_server

            run_production_server(
                self,
                host=_host,
                port=_port,
                workers=self.config.workers,
                log_level=self.config.log_level,
                ssl_certfile=self.config.ssl_certfile,
                ssl_keyfile=self.config.ssl_keyfile,
            )
        else:
            from tern.server.dev import run_dev_server

            run_dev_server(self, _host, _port, log_level=self.config.log_level)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._table is not None

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            middleware=self._middleware,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,  # noqa: ARG002
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Builds the route table at startup (reporting any failure as
        ``lifespan.startup.failed`` so the server refuses to start) and
        runs the development reloader for the lifetime of the server.
        """
        async with anyio.create_task_group() as tg:
            while True:
                message: dict[str, Any] = dict(await receive())
                msg_type = message["type"]

                if msg_type == "lifespan.startup":
                    try:
                        self._ensure_frozen()
                    except Exception as exc:
                        await send({"type": "lifespan.startup.failed", "message": str(exc)})
                        return
                    if self._reloader is not None:
                        tg.start_soon(self._reloader.watch, self.config.reload_interval)
                    await send({"type": "lifespan.startup.complete"})

                elif msg_type == "lifespan.shutdown":
                    tg.cancel_scope.cancel()
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Build the route table (raises on any content problem)
        self._table = self.build_table()

        # 2. Capture middleware as immutable tuple
        self._middleware = (*build_pipeline(self.config), *self._extra_middleware)

        # 3. Development: watch the content root and swap in rebuilt tables.
        #    Production tables live for the whole process.
        if self.config.reload and not self.config.is_production:
            self._reloader = TableReloader(self.config.root, self.build_table, self._swap_table)

        self._frozen = True

    def _swap_table(self, table: RouteTable) -> None:
        self._table = table

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Add middleware before calling app.run()."
            )
            raise RuntimeError(msg)
