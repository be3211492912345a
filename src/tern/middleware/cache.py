"""Shared HTTP cache — an in-process reverse-proxy cache.

Production only. Sits in front of compression so each encoding variant
is produced once and then served from memory. Freshness follows the
response's own ``Cache-Control`` / ``Expires`` headers; the cache never
extends a lifetime the origin didn't grant.

Every response passing through gets an ``X-Cache`` trace
(``miss, store``, ``fresh``, ``pass``, ...) and cache hits get ``Age``.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, replace
from email.utils import parsedate_to_datetime

from tern.http.headers import Headers
from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.conditional import is_fresh, not_modified
from tern.middleware.protocol import Next

# Requests carrying these are user-specific and bypass the cache
_PRIVATE_REQUEST_HEADERS = ("authorization", "cookie")

# Stripped before forwarding so the origin always returns a full 200
_VALIDATOR_HEADERS = frozenset({b"if-none-match", b"if-modified-since"})

_UNCACHEABLE_DIRECTIVES = frozenset({"no-store", "private", "no-cache"})

# (path, query string)
_Key = tuple[str, bytes]
# ((header name, request value), ...) for each name in the response's Vary
_VaryValues = tuple[tuple[str, str | None], ...]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    response: Response
    stored_at: float
    ttl: float
    vary: _VaryValues

    def age(self, now: float) -> float:
        return max(0.0, now - self.stored_at)

    def is_fresh(self, now: float) -> bool:
        return self.age(now) < self.ttl


def parse_cache_control(value: str | None) -> dict[str, str | None]:
    """Parse ``Cache-Control`` into ``{directive: argument-or-None}``."""
    directives: dict[str, str | None] = {}
    for part in (value or "").split(","):
        name, sep, arg = part.strip().partition("=")
        if not name:
            continue
        directives[name.lower()] = arg.strip('"') if sep else None
    return directives


def freshness_lifetime(response: Response, now: float) -> float:
    """Seconds the response may be served without revalidation."""
    directives = parse_cache_control(response.header("Cache-Control"))
    for directive in ("s-maxage", "max-age"):
        arg = directives.get(directive)
        if arg is not None:
            try:
                return float(int(arg))
            except ValueError:
                return 0.0

    expires = response.header("Expires")
    if expires:
        try:
            return max(0.0, parsedate_to_datetime(expires).timestamp() - now)
        except (TypeError, ValueError):
            return 0.0
    return 0.0


class SharedCache:
    """Bounded, thread-safe LRU cache of GET responses.

    Entries are keyed by path and query string; each key holds one
    variant per distinct set of request values for the headers named
    in the response's ``Vary``. Every variant counts against
    *max_entries*; the least recently used one is evicted first.
    Responses with ``Vary: *``, or with ``no-store``, ``private`` or
    ``no-cache``, are never stored.
    """

    __slots__ = ("_clock", "_entries", "_lock", "_variant_counts", "_vary_names", "max_entries")

    def __init__(self, max_entries: int = 1024, *, clock: Callable[[], float] = time.time) -> None:
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[tuple[_Key, _VaryValues], CacheEntry] = OrderedDict()
        self._vary_names: dict[_Key, tuple[str, ...]] = {}
        self._variant_counts: dict[_Key, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._vary_names.clear()
            self._variant_counts.clear()

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method != "GET" or any(h in request.headers for h in _PRIVATE_REQUEST_HEADERS):
            response = await next(request)
            return response.with_header("X-Cache", "pass")

        key = (request.path, request.query_string)
        now = self._clock()

        if _wants_reload(request):
            trace = "reload"
        else:
            entry = self._lookup(key, request)
            if entry is not None and entry.is_fresh(now):
                return self._serve(entry, request, now)
            trace = "stale" if entry is not None else "miss"

        response = await next(_without_validators(request))
        ttl = freshness_lifetime(response, now)
        if _is_storable(response) and ttl > 0:
            self._store(key, CacheEntry(response, now, ttl, _vary_values(response, request)))
            trace += ", store"

        if is_fresh(request, response):
            response = not_modified(response)
        return response.with_header("X-Cache", trace)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _lookup(self, key: _Key, request: Request) -> CacheEntry | None:
        with self._lock:
            names = self._vary_names.get(key)
            if names is None:
                return None
            slot = (key, tuple((name, request.headers.get(name)) for name in names))
            entry = self._entries.get(slot)
            if entry is not None:
                self._entries.move_to_end(slot)
            return entry

    def _store(self, key: _Key, entry: CacheEntry) -> None:
        slot = (key, entry.vary)
        with self._lock:
            if slot not in self._entries:
                self._variant_counts[key] = self._variant_counts.get(key, 0) + 1
            self._entries[slot] = entry
            self._entries.move_to_end(slot)
            # Lookups follow the Vary of the most recent response for the key
            self._vary_names[key] = tuple(name for name, _ in entry.vary)
            while len(self._entries) > self.max_entries:
                (evicted, _), _ = self._entries.popitem(last=False)
                self._release(evicted)

    def _release(self, key: _Key) -> None:
        remaining = self._variant_counts[key] - 1
        if remaining:
            self._variant_counts[key] = remaining
        else:
            del self._variant_counts[key]
            del self._vary_names[key]

    def _serve(self, entry: CacheEntry, request: Request, now: float) -> Response:
        response = entry.response.with_header("Age", str(int(entry.age(now))))
        if is_fresh(request, response):
            response = not_modified(response)
        return response.with_header("X-Cache", "fresh")


def _wants_reload(request: Request) -> bool:
    if "no-cache" in parse_cache_control(request.headers.get("cache-control")):
        return True
    return (request.headers.get("pragma") or "").lower() == "no-cache"


def _without_validators(request: Request) -> Request:
    raw = tuple((k, v) for k, v in request.headers.raw if k.lower() not in _VALIDATOR_HEADERS)
    if len(raw) == len(request.headers.raw):
        return request
    return replace(request, headers=Headers(raw))


def _is_storable(response: Response) -> bool:
    if response.status != 200:
        return False
    if (response.header("Vary") or "").strip() == "*":
        return False
    directives = parse_cache_control(response.header("Cache-Control"))
    return not (_UNCACHEABLE_DIRECTIVES & directives.keys())


def _vary_values(response: Response, request: Request) -> _VaryValues:
    names = [n.strip().lower() for n in (response.header("Vary") or "").split(",") if n.strip()]
    return tuple((name, request.headers.get(name)) for name in names)
