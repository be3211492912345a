"""Development-mode route table reloader.

Watches the content root by polling a stat signature and, when it
changes, rebuilds the whole table off the event loop and swaps it in
with a single reference assignment. Requests in flight keep the table
they started with; new requests see the new one. Nothing is rebuilt
per request.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import anyio
import anyio.to_thread

from tern.errors import TernError
from tern.routing.table import RouteTable

logger = logging.getLogger("tern.reload")

Signature: TypeAlias = frozenset[tuple[str, int, int]]


def tree_signature(root: str | Path) -> Signature:
    """Snapshot ``(relative path, mtime_ns, size)`` for every visible file."""
    root_path = Path(root)
    entries: set[tuple[str, int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            if filename.startswith("."):
                continue
            path = Path(dirpath) / filename
            try:
                stat = path.stat()
            except OSError:
                continue
            entries.add((path.relative_to(root_path).as_posix(), stat.st_mtime_ns, stat.st_size))
    return frozenset(entries)


class TableReloader:
    """Rebuild a route table when its content root changes.

    Args:
        root: Directory to watch.
        build: Zero-argument callable producing a fresh ``RouteTable``.
        swap: Called with each successfully rebuilt table.
    """

    __slots__ = ("_build", "_signature", "_swap", "root")

    def __init__(
        self,
        root: str | Path,
        build: Callable[[], RouteTable],
        swap: Callable[[RouteTable], None],
    ) -> None:
        self.root = Path(root)
        self._build = build
        self._swap = swap
        self._signature: Signature = tree_signature(self.root)

    def poll(self) -> bool:
        """Rebuild if the tree changed since the last poll. Blocking.

        Returns True when a new table was swapped in. A failed rebuild
        is logged and the current table stays active, so a half-saved
        file doesn't take the dev server down.
        """
        signature = tree_signature(self.root)
        if signature == self._signature:
            return False
        self._signature = signature
        try:
            table = self._build()
        except TernError:
            logger.exception("Rebuild of %s failed; keeping the previous routes", self.root)
            return False
        self._swap(table)
        logger.info("Reloaded %d routes from %s", len(table), self.root)
        return True

    async def watch(self, interval: float) -> None:
        """Poll forever on a worker thread. Cancel the surrounding scope to stop."""
        while True:
            await anyio.sleep(interval)
            await anyio.to_thread.run_sync(self.poll)
