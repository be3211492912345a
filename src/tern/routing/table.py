"""Immutable route table.

Built once at startup and read concurrently by every request handler
without locking: no entry is added, removed, or replaced after
construction.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from tern.errors import ConfigurationError
from tern.http.response import Response

INDEX_ROUTE = "/"


class RouteTable(Mapping[str, Response]):
    """Exact-match mapping from route to precomputed ``Response``.

    ``lookup`` is total: unknown paths get the index response, so the
    single-page app's client-side router sees every URL.

    Raises:
        ConfigurationError: If no entry exists for ``/``.
    """

    __slots__ = ("_default", "_routes", "version")

    def __init__(self, routes: Mapping[str, Response], *, version: str) -> None:
        frozen = MappingProxyType(dict(routes))
        default = frozen.get(INDEX_ROUTE)
        if default is None:
            msg = (
                f"No {INDEX_ROUTE!r} route: the content root needs an index.html "
                "at its top level to serve as the default response"
            )
            raise ConfigurationError(msg)
        self._routes: Mapping[str, Response] = frozen
        self._default: Response = default
        self.version: str = version

    @property
    def default(self) -> Response:
        """The response served for unmatched paths (the ``/`` entry)."""
        return self._default

    def lookup(self, path: str) -> Response:
        """Return the response for *path*, or the default on a miss."""
        return self._routes.get(path, self._default)

    def __getitem__(self, path: str) -> Response:
        return self._routes[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({len(self)} routes, version={self.version!r})"
