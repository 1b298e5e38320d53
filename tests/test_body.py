import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.body import json_body_middleware
from app.main import create_app

JSON = {"content-type": "application/json"}


@pytest.fixture
def client(tmp_path):
    return TestClient(create_app(static_dirs=[tmp_path], json_body_limit=64))


@pytest.fixture
def echo_client():
    app = FastAPI()
    app.middleware("http")(json_body_middleware(1024))

    @app.post("/echo")
    def echo(request: Request):
        return {"json": getattr(request.state, "json", None)}

    return TestClient(app)


def test_malformed_json_on_greeting(client):
    res = client.request("GET", "/hello", content=b"{bad", headers=JSON)
    assert res.status_code == 400
    assert res.json() == {"detail": "invalid_json"}


def test_malformed_json_on_static_path(client):
    res = client.post("/index.html", content=b"[1,", headers=JSON)
    assert res.status_code == 400


@pytest.mark.parametrize("body", [b'"text"', b"42", b"null", b"true"])
def test_scalar_top_level_rejected(client, body):
    res = client.request("GET", "/hello", content=body, headers=JSON)
    assert res.status_code == 400


def test_valid_json_passes_through(client):
    res = client.request("GET", "/hello?firstName=Ann", content=b'{"a": 1}', headers=JSON)
    assert res.status_code == 200
    assert res.text == "Hello Ann undefined"


def test_oversized_body(client):
    body = b'{"k": "' + b"x" * 100 + b'"}'
    res = client.request("GET", "/hello", content=body, headers=JSON)
    assert res.status_code == 413
    assert res.json() == {"detail": "payload_too_large"}


def test_other_content_types_are_ignored(client):
    res = client.request(
        "GET", "/hello", content=b"{bad", headers={"content-type": "text/plain"}
    )
    assert res.status_code == 200


def test_parsed_body_on_request_state(echo_client):
    res = echo_client.post("/echo", json={"name": "Ann"})
    assert res.json() == {"json": {"name": "Ann"}}


def test_charset_parameter_accepted(echo_client):
    res = echo_client.post(
        "/echo",
        content=b"[1, 2]",
        headers={"content-type": "application/json; charset=utf-8"},
    )
    assert res.json() == {"json": [1, 2]}


def test_empty_body_is_empty_object(echo_client):
    res = echo_client.post("/echo", content=b"", headers=JSON)
    assert res.json() == {"json": {}}


def test_no_content_type_leaves_state_unset(echo_client):
    assert echo_client.post("/echo").json() == {"json": None}


@pytest.mark.parametrize("body", [b"[NaN]", b"[Infinity]", b'{"a": -Infinity}'])
def test_non_standard_constants_rejected(client, body):
    res = client.request("GET", "/hello", content=body, headers=JSON)
    assert res.status_code == 400
    assert res.json() == {"detail": "invalid_json"}


@pytest.mark.parametrize("charset", ["latin1", "koi8-r", "utf-99"])
def test_unsupported_charset(client, charset):
    res = client.request(
        "GET",
        "/hello",
        content=b"{}",
        headers={"content-type": f"application/json; charset={charset}"},
    )
    assert res.status_code == 415
    assert res.json() == {"detail": "unsupported_charset"}


def test_utf16_body(echo_client):
    res = echo_client.post(
        "/echo",
        content='{"name": "Zoë"}'.encode("utf-16"),
        headers={"content-type": "application/json; charset=utf-16"},
    )
    assert res.json() == {"json": {"name": "Zoë"}}


def test_invalid_utf8_is_400(client):
    res = client.request("GET", "/hello", content=b'["\xff"]', headers=JSON)
    assert res.status_code == 400
