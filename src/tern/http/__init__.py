"""HTTP primitives: immutable request, response, and header types."""

from tern.http.headers import Headers
from tern.http.request import Request
from tern.http.response import Response

__all__ = ["Headers", "Request", "Response"]
