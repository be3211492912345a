"""ASGI response sending — translates a tern Response to ASGI messages."""

from tern._internal.asgi import Send
from tern.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a tern Response into ASGI send() calls.

    Headers go out in their stored order with lowercased names, as ASGI
    requires. ``Content-Length`` is only computed when the response
    doesn't carry one: a HEAD response keeps the length of the body it
    would have sent.
    """
    body = response.body if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    ]
    if not response.has_header("Content-Length") and _body_allowed(response.status):
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
