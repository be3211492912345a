"""Tests for the exception hierarchy and HTTP error mapping."""

from conftest import make_request

from tern.errors import (
    ConfigurationError,
    ContentError,
    Forbidden,
    HTTPError,
    MethodNotAllowed,
    RouteCollisionError,
    TernError,
)
from tern.server.errors import handle_http_error, handle_internal_error


class TestHierarchy:
    def test_base_classes(self) -> None:
        assert issubclass(ConfigurationError, TernError)
        assert issubclass(ContentError, TernError)
        assert issubclass(RouteCollisionError, ConfigurationError)
        assert issubclass(HTTPError, TernError)
        assert issubclass(Forbidden, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)

    def test_collision_message(self) -> None:
        exc = RouteCollisionError("/v1/a.css", "styles/a.css", "v1/styles/a.css")
        assert "'/v1/a.css'" in str(exc)
        assert "styles/a.css" in str(exc)
        assert "v1/styles/a.css" in str(exc)


class TestHTTPError:
    def test_str(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"
        assert str(HTTPError(status=418)) == "418"

    def test_forbidden(self) -> None:
        exc = Forbidden()
        assert exc.status == 403
        assert exc.detail == "Forbidden"

    def test_method_not_allowed(self) -> None:
        exc = MethodNotAllowed(frozenset({"HEAD", "GET"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, HEAD"),)
        assert "GET, HEAD" in exc.detail


class TestHandlers:
    def test_http_error_response(self) -> None:
        response = handle_http_error(MethodNotAllowed(frozenset({"GET"})), make_request("POST"))
        assert response.status == 405
        assert response.header("Allow") == "GET"
        assert response.header("Content-Type") == "text/plain; charset=utf-8"
        assert response.text.startswith("Method not allowed")

    def test_internal_error_logged(self, caplog) -> None:
        response = handle_internal_error(RuntimeError("boom"), make_request(path="/x"))
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "500 GET /x" in caplog.text
