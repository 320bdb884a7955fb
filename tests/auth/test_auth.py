from httpx import Request
from pydantic import SecretStr

from mailbreeze.auth import BearerTokenAuth, HeaderAuth


def test_bearer_token_auth():
    auth = BearerTokenAuth(token="dummy_bearer_token")
    request = Request(method="GET", url="https://example.com")
    auth.authenticate(request)
    assert request.headers["Authorization"] == "Bearer dummy_bearer_token"


def test_bearer_token_auth_accepts_secret_str():
    auth = BearerTokenAuth(SecretStr("dummy_bearer_token"))
    request = Request(method="GET", url="https://example.com")
    auth.authenticate(request)
    assert request.headers["Authorization"] == "Bearer dummy_bearer_token"


def test_header_auth_custom_header_without_prefix():
    auth = HeaderAuth("dummy_api_key", header_name="X-API-Key")
    request = Request(method="GET", url="https://example.com")
    auth.authenticate(request)
    assert request.headers["X-API-Key"] == "dummy_api_key"
    assert "Authorization" not in request.headers


def test_empty_secret_leaves_request_alone():
    auth = HeaderAuth("")
    request = Request(method="GET", url="https://example.com")
    auth.authenticate(request)
    assert "Authorization" not in request.headers


def test_repr_hides_token():
    auth = BearerTokenAuth(token="dummy_bearer_token")
    assert "dummy_bearer_token" not in repr(auth)
    assert "Bearer" in repr(auth)
