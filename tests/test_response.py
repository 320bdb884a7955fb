from datetime import datetime, timezone

import httpx
import pytest

from mailbreeze.exceptions import ErrorKind, MailBreezeError
from mailbreeze.models import Email
from mailbreeze.response import APIResponse, parse_retry_after, unwrap_envelope

REQUEST = httpx.Request("GET", "https://api.example.com/api/v1/emails/email_123")


def test_parse_retry_after_seconds():
    assert parse_retry_after("30") == 30
    assert parse_retry_after("1.5") == 1.5


def test_parse_retry_after_http_date():
    now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
    assert parse_retry_after("Mon, 01 Jan 2024 00:00:45 GMT", now=now) == 45


def test_parse_retry_after_in_the_past_is_zero():
    now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
    assert parse_retry_after("Sun, 31 Dec 2023 23:59:00 GMT", now=now) == 0


@pytest.mark.parametrize("value", [None, "", "soon", "-5", "inf", "-inf", "nan", "1e400"])
def test_parse_retry_after_invalid(value):
    assert parse_retry_after(value) is None


def test_unwrap_envelope():
    assert unwrap_envelope({"success": True, "data": {"id": 1}}) == {"id": 1}
    assert unwrap_envelope({"id": 1}) == {"id": 1}
    assert unwrap_envelope([1, 2]) == [1, 2]


def test_content_decodes_into_model():
    response = httpx.Response(200, request=REQUEST, json={
        "success": True,
        "data": {
            "_id": "email_123",
            "messageId": "email_123",
            "from": "sender@example.com",
            "to": ["recipient@example.com"],
            "status": "delivered",
            "createdAt": "2024-01-01T00:00:00Z",
            "deliveredAt": "2024-01-01T00:01:00Z",
        },
    })
    email = APIResponse(response, response_model=Email).content()
    assert email.id == "email_123"
    assert email.from_ == "sender@example.com"
    assert email.delivered_at == "2024-01-01T00:01:00Z"


def test_text_content_returned_as_text():
    response = httpx.Response(200, request=REQUEST, text="uploaded")
    assert APIResponse(response).content() == "uploaded"


def test_missing_body_for_model_is_malformed():
    response = httpx.Response(200, request=REQUEST)
    with pytest.raises(MailBreezeError) as exc_info:
        APIResponse(response, response_model=Email).content()
    assert exc_info.value.kind is ErrorKind.NETWORK
    assert not exc_info.value.is_retryable


def test_error_reads_retry_after_header():
    response = httpx.Response(429, request=REQUEST, headers={"Retry-After": "7"}, json={"error": "Too many"})
    error = APIResponse(response).error()
    assert error.kind is ErrorKind.RATE_LIMIT
    assert error.retry_after == 7


def test_error_with_non_json_body():
    response = httpx.Response(502, request=REQUEST, text="<html>Bad Gateway</html>")
    error = APIResponse(response).error()
    assert error.kind is ErrorKind.SERVER_ERROR
    assert error.message == "<html>Bad Gateway</html>"
