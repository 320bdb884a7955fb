from datetime import timedelta
from unittest.mock import patch

import httpx
import pytest
from httpx import Request

from mailbreeze import ErrorKind, MailBreeze, MailBreezeError
from mailbreeze.config import ClientConfig
from mailbreeze.executor import RequestExecutor
from mailbreeze.resources import Contacts

from .conftest import API_KEY, BASE_URL, envelope


def test_client_creation():
    client = MailBreeze("test_api_key")
    assert client.config.max_retries == 3
    assert client.emails is not None
    assert client.lists is not None
    assert client.verification is not None
    assert client.attachments is not None


def test_client_requires_api_key():
    with pytest.raises(ValueError):
        MailBreeze()


def test_client_rejects_config_and_settings_together():
    with pytest.raises(TypeError):
        MailBreeze("key", config=ClientConfig(api_key="key"))


def test_builder_pattern():
    client = (MailBreeze.builder("test_api_key")
              .base_url("https://custom.api.com")
              .timeout(timedelta(seconds=60))
              .max_retries(5)
              .build())
    assert isinstance(client, MailBreeze)
    assert client.config.base_url == "https://custom.api.com"
    assert client.config.timeout == 60.0
    assert client.config.max_retries == 5


def test_client_repr_hides_api_key():
    client = MailBreeze(API_KEY)
    assert API_KEY not in repr(client)
    assert API_KEY not in repr(client.config)


def test_from_env(monkeypatch):
    monkeypatch.setenv("MAILBREEZE_API_KEY", API_KEY)
    client = MailBreeze.from_env(max_retries=1)
    assert client.config.api_key.get_secret_value() == API_KEY
    assert client.config.max_retries == 1


def test_client_shares_supplied_executor():
    executor = RequestExecutor(ClientConfig(api_key="key", max_retries=0))
    client = MailBreeze(executor=executor)
    assert client.config is executor.config
    assert client.contacts("list_1")._executor is executor


def test_client_rejects_config_and_executor_together():
    executor = RequestExecutor(ClientConfig(api_key="key"))
    with pytest.raises(TypeError):
        MailBreeze(config=ClientConfig(api_key="other"), executor=executor)


def test_contacts_are_scoped_to_a_list(client):
    contacts = client.contacts("list_123")
    assert isinstance(contacts, Contacts)
    assert contacts.list_id == "list_123"
    assert contacts.base_path == "/contact-lists/list_123/contacts"


@pytest.mark.asyncio
async def test_send_email_integration(client, stub_api):
    stub_api.add(201, envelope({"messageId": "msg_123abc"}))
    async with client:
        result = await client.emails.send(from_="sender@example.com", to=["recipient@example.com"],
                                          subject="Hello", html="<p>Test</p>")
    assert result.message_id == "msg_123abc"
    assert stub_api.requests[0].url.path == "/api/v1/emails"


@pytest.mark.asyncio
async def test_contacts_method(client, stub_api):
    stub_api.add(200, envelope({
        "contacts": [
            {"id": "contact_1", "email": "a@example.com", "status": "active", "source": "api",
             "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z"},
        ],
        "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1, "hasNext": False, "hasPrev": False},
    }))
    async with client:
        result = await client.contacts("list_123").list()
    assert len(result.contacts) == 1
    assert stub_api.requests[0].url.path == "/api/v1/contact-lists/list_123/contacts"


@pytest.mark.asyncio
async def test_context_manager_closes_http_client(client):
    with patch.object(httpx.AsyncClient, 'aclose') as mock_aclose:
        async with client:
            pass
    mock_aclose.assert_awaited_once()


@patch.object(httpx.AsyncClient, 'send', return_value=httpx.Response(401, request=Request("GET", BASE_URL),
                                                                      json={"error": "Invalid API key"}))
@pytest.mark.asyncio
async def test_authentication_error_surfaces_from_resource(mock_send):
    client = MailBreeze("bad_key", max_retries=3)
    with pytest.raises(MailBreezeError) as exc_info:
        await client.emails.get("email_123")
    assert exc_info.value.kind is ErrorKind.AUTHENTICATION
    assert mock_send.await_count == 1
