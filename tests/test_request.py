import pytest

from oauthcore.request import Body, MapErr, Request, Response, Status


def test_status_codes():
    response = Response()
    response.redirect("https://example.com/cb")
    assert int(response.status) == 302
    response.client_error()
    assert int(response.status) == 400
    response.unauthorized("Bearer")
    assert int(response.status) == 401
    response.ok()
    assert int(response.status) == 200


def test_response_defaults():
    response = Response()
    assert response.status is Status.OK
    assert response.location is None
    assert response.www_authenticate is None
    assert response.body is None


def test_redirect_then_unauthorized():
    response = Response()
    response.redirect("https://example.com/cb")
    assert response.status is Status.REDIRECT
    assert response.location == "https://example.com/cb"
    response.unauthorized("Bearer")
    assert response.status is Status.UNAUTHORIZED
    assert response.location is None
    assert response.www_authenticate == "Bearer"


def test_client_error_and_ok_clear_headers():
    response = Response()
    response.unauthorized("Bearer")
    response.client_error()
    assert response.status is Status.BAD_REQUEST
    assert response.www_authenticate is None
    response.redirect("https://example.com")
    response.ok()
    assert response.status is Status.OK
    assert response.location is None


def test_bodies():
    response = Response()
    response.body_text("hello")
    assert response.body == Body("hello")
    assert response.body.as_str() == "hello"
    assert not response.body.is_json
    response.body_json('{"a": 1}')
    assert response.body.is_json
    assert response.body.as_str() == '{"a": 1}'


def test_request_accessors():
    request = Request(query={"a": "1"}, urlbody={"b": "2"}, auth="Bearer token")
    assert dict(request.query_parameters()) == {"a": "1"}
    assert dict(request.urlbody_parameters()) == {"b": "2"}
    assert request.authheader() == "Bearer token"
    assert Request().authheader() is None


def test_request_views_are_read_only():
    request = Request(query={"a": "1"})
    with pytest.raises(TypeError):
        request.query_parameters()["a"] = "2"
    request.query["c"] = "3"
    assert request.query_parameters()["c"] == "3"


class MappedError(Exception):
    pass


class Failing:
    def ok(self):
        raise RuntimeError("broken")


def test_map_err_maps_errors():
    wrapped = MapErr(Failing(), lambda err: MappedError(str(err)))
    with pytest.raises(MappedError, match="broken"):
        wrapped.call("ok")


def test_map_err_passes_results():
    response = Response()
    wrapped = MapErr(response, MappedError)
    wrapped.call("redirect", "https://example.com")
    assert wrapped.into_inner() is response
    assert response.location == "https://example.com"
    request = MapErr(Request(auth="Basic token"), MappedError)
    assert request.call("authheader") == "Basic token"


def test_map_err_rejects_private_names():
    wrapped = MapErr(Response(), MappedError)
    with pytest.raises(AttributeError):
        wrapped.call("__init__")