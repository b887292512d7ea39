import base64
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import jwt
import pytest

from restauth.authorization import (
    basic_auth_client,
    bearer_auth_client,
    host_from_token,
    set_access_token,
)
from restauth.client import Request, path
from restauth.errors import TokenError

ISSUER = "https://idp.example.com:8443/auth/realms/master"


def _token(claims):
    return jwt.encode(claims, None, algorithm="none")


@pytest.fixture
def server():
    received = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            received.append(dict(self.headers))
            self.send_response(200)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", "2")
            self.end_headers()
            self.wfile.write(b"ok")

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield received, f"http://127.0.0.1:{httpd.server_port}"
    httpd.shutdown()
    httpd.server_close()


def _issued_jwt():
    return _token({"iss": "https://idp.example.com/auth"})


def test_host_from_token_keeps_port():
    assert host_from_token(_token({"iss": ISSUER})) == "idp.example.com:8443"


def test_host_from_token_without_issuer():
    assert host_from_token(_token({"sub": "someone"})) == ""


def test_host_from_token_rejects_garbage():
    with pytest.raises(TokenError, match="cannotParse.token"):
        host_from_token("token")


def test_host_from_token_rejects_non_string_issuer():
    with pytest.raises(TokenError, match="cannotGetIssuer.token"):
        host_from_token(_token({"iss": 12}))


def test_set_access_token_updates_request():
    issued = _issued_jwt()
    request = Request("GET", "http://localhost")
    set_access_token(issued)(request)
    assert request.headers["Authorization"] == f"Bearer {issued}"
    assert request.headers["X-Forwarded-Proto"] == "https"
    assert request.host == "idp.example.com"


def test_set_access_token_rejects_invalid_token():
    with pytest.raises(TokenError):
        set_access_token("token")


def test_set_access_token_over_the_wire(server):
    received, url = server
    issued = _issued_jwt()
    client = bearer_auth_client(url, 60, lambda: "token")
    assert client.get(path("/x"), set_access_token(issued)) == "ok"
    assert received[0]["Host"] == "idp.example.com"
    assert received[0]["Authorization"] == f"Bearer {issued}"


def test_basic_auth_client(server):
    received, url = server
    password = "password"
    client = basic_auth_client(url, 60, "user", password)
    assert client.get(path("/x")) == "ok"
    scheme, _, encoded = received[0]["Authorization"].partition(" ")
    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == f"user:{password}"


def test_bearer_auth_client(server):
    received, url = server
    client = bearer_auth_client(url, 60, lambda: "token")
    assert client.get(path("/x")) == "ok"
    assert client.get(path("/x")) == "ok"
    assert [r["Authorization"] for r in received] == ["Bearer token", "Bearer token"]


def test_bearer_auth_client_provider_failure(server):
    received, url = server
    failure = RuntimeError("no token")

    def provider():
        raise failure

    client = bearer_auth_client(url, 60, provider)
    with pytest.raises(RuntimeError) as excinfo:
        client.get(path("/x"))
    assert excinfo.value is failure
    assert received == []