"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Route table entries are
built once at startup and shared by every worker, so a Response is
never mutated in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An immutable HTTP response: status, ordered headers, body.

    Header names are unique (case-insensitively); constructing a
    Response with a repeated name raises ``ValueError``. ``with_header``
    therefore replaces an existing header in place instead of adding a
    second one.
    """

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, _ in self.headers:
            lowered = name.lower()
            if lowered in seen:
                msg = f"Duplicate response header {name!r}"
                raise ValueError(msg)
            seen.add(lowered)

    # -- Header access --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the value of header *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key, _ in self.headers)

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_body(self, body: bytes) -> Response:
        """Return a new Response with a different body (headers untouched)."""
        return replace(self, body=body)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set to *value*.

        An existing header of the same name keeps its position.
        """
        lowered = name.lower()
        headers = list(self.headers)
        for index, (key, _) in enumerate(headers):
            if key.lower() == lowered:
                headers[index] = (key, value)
                return replace(self, headers=tuple(headers))
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with every header in *headers* set."""
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def without_header(self, *names: str) -> Response:
        """Return a new Response with the named headers removed."""
        drop = {name.lower() for name in names}
        return replace(
            self,
            headers=tuple((key, value) for key, value in self.headers if key.lower() not in drop),
        )

    # -- Body helpers --

    @property
    def content_type(self) -> str:
        return self.header("Content-Type") or ""

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    @classmethod
    def plain(cls, body: str, status: int = 200) -> Response:
        """A small text/plain response, used for errors and redirects."""
        encoded = body.encode("utf-8")
        return cls(
            body=encoded,
            status=status,
            headers=(
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(encoded))),
            ),
        )
