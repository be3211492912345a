"""HEAD support — same headers as GET, no body."""

from tern.http.request import Request
from tern.http.response import Response
from tern.middleware.protocol import Next


async def head_request(request: Request, next: Next) -> Response:
    """Drop the body of HEAD responses, keeping ``Content-Length`` intact."""
    response = await next(request)
    if request.method != "HEAD" or not response.body:
        return response
    return response.with_body(b"")
