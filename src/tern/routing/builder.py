"""Startup orchestration: content root → RouteTable.

Scan every file, derive its route, rewrite eligible HTML, build the
response, and populate the table. Single-threaded and blocking; any
failure aborts the build so the server never starts with a partial
table.
"""

import logging
import time
from collections.abc import Mapping
from pathlib import Path

from tern.config import ONE_YEAR
from tern.content.responses import build_response
from tern.content.rewrite import needs_rewrite, rewrite
from tern.content.routes import route_for
from tern.content.scanner import read_version, scan_files
from tern.errors import RouteCollisionError
from tern.http.response import Response
from tern.routing.table import RouteTable

logger = logging.getLogger("tern.content")


def build_route_table(
    root: str | Path,
    *,
    settings: Mapping[str, str] | None = None,
    max_age: int = ONE_YEAR,
    last_modified: float | None = None,
) -> RouteTable:
    """Build the route table for the content tree at *root*.

    Args:
        root: Content directory. Must contain a ``version`` file and a
            top-level ``index.html``.
        settings: Values for configuration markers in rewritten pages.
        max_age: Cache lifetime in seconds for ``Cache-Control`` and
            ``Expires``.
        last_modified: Timestamp shared by every response's
            ``Last-Modified``. Defaults to now.

    Raises:
        ContentError: The root, the version file, or a file is unreadable.
        RouteCollisionError: Two files derive the same route.
        ConfigurationError: No file maps to ``/``.
    """
    settings = settings or {}
    stamp = time.time() if last_modified is None else last_modified
    version = read_version(root)

    routes: dict[str, Response] = {}
    sources: dict[str, str] = {}
    rewritten = 0

    for entry in scan_files(root):
        route = route_for(entry.relative_path, version)
        if route in sources:
            raise RouteCollisionError(route, sources[route], entry.relative_path)

        content = entry.content
        if needs_rewrite(route, entry.relative_path):
            content = rewrite(content, settings, version)
            rewritten += 1

        routes[route] = build_response(
            content,
            route,
            filename=entry.name,
            version=version,
            last_modified=stamp,
            max_age=max_age,
        )
        sources[route] = entry.relative_path
        logger.debug("route %s -> %s (%d bytes)", route, entry.relative_path, len(content))

    table = RouteTable(routes, version=version)
    logger.info(
        "Built %d routes from %s (version %s, %d rewritten)",
        len(table),
        Path(root).resolve(),
        version,
        rewritten,
    )
    return table
