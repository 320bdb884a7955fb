import pytest

from mailbreeze.exceptions import ErrorKind, MailBreezeError
from mailbreeze.models import CreateListParams

from ..conftest import envelope

LIST = {
    "id": "list_123",
    "name": "Newsletter Subscribers",
    "description": "Main newsletter list",
    "totalContacts": 100,
    "activeContacts": 95,
    "createdAt": "2024-01-01T00:00:00Z",
}


@pytest.mark.asyncio
async def test_create_list(client, stub_api):
    stub_api.add(201, envelope(LIST))
    mailing_list = await client.lists.create(CreateListParams(name="Newsletter Subscribers",
                                                              description="Main newsletter list"))
    assert mailing_list.id == "list_123"
    assert mailing_list.total_contacts == 100
    assert stub_api.requests[0].method == "POST"
    assert stub_api.requests[0].url.path == "/api/v1/contact-lists"
    assert stub_api.last_json() == {"name": "Newsletter Subscribers", "description": "Main newsletter list"}


@pytest.mark.asyncio
async def test_list_lists(client, stub_api):
    stub_api.add(200, envelope({
        "lists": [LIST, dict(LIST, id="list_456", name="VIP")],
        "pagination": {"page": 1, "limit": 20, "total": 2, "totalPages": 1, "hasNext": False},
    }))
    result = await client.lists.list(limit=20)
    assert [l.name for l in result.lists] == ["Newsletter Subscribers", "VIP"]
    assert stub_api.requests[0].url.params["limit"] == "20"


@pytest.mark.asyncio
async def test_iterate_lists_stops_on_empty_page(client, stub_api):
    stub_api.add(200, envelope({
        "lists": [LIST],
        "pagination": {"page": 1, "limit": 1, "total": 3, "totalPages": 3, "hasNext": True},
    })).add(200, envelope({
        "lists": [],
        "pagination": {"page": 2, "limit": 1, "total": 3, "totalPages": 3, "hasNext": True},
    }))
    found = [l.id async for l in client.lists.iterate()]
    assert found == ["list_123"]
    assert stub_api.calls == 2


@pytest.mark.asyncio
async def test_get_list(client, stub_api):
    stub_api.add(200, envelope(LIST))
    mailing_list = await client.lists.get("list_123")
    assert mailing_list.description == "Main newsletter list"
    assert stub_api.requests[0].url.path == "/api/v1/contact-lists/list_123"


@pytest.mark.asyncio
async def test_get_missing_list(client, stub_api):
    stub_api.add(404, {"success": False, "error": {"code": "NOT_FOUND", "message": "List not found"}})
    with pytest.raises(MailBreezeError) as exc_info:
        await client.lists.get("list_missing")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.code == "NOT_FOUND"
    assert exc_info.value.message == "List not found"
    assert stub_api.calls == 1


@pytest.mark.asyncio
async def test_update_list(client, stub_api):
    stub_api.add(200, envelope(dict(LIST, name="Renamed")))
    mailing_list = await client.lists.update("list_123", name="Renamed")
    assert mailing_list.name == "Renamed"
    assert stub_api.requests[0].method == "PATCH"
    assert stub_api.last_json() == {"name": "Renamed"}


@pytest.mark.asyncio
async def test_delete_list(client, stub_api):
    stub_api.add(204)
    assert await client.lists.delete("list_123") is None
    assert stub_api.requests[0].method == "DELETE"
    assert stub_api.requests[0].url.path == "/api/v1/contact-lists/list_123"


@pytest.mark.asyncio
async def test_list_stats(client, stub_api):
    stub_api.add(200, envelope({"totalContacts": 100, "activeContacts": 90, "suppressedContacts": 10}))
    stats = await client.lists.stats("list_123")
    assert stats.total_contacts == 100
    assert stats.active_contacts == 90
    assert stats.suppressed_contacts == 10
    assert stub_api.requests[0].url.path == "/api/v1/contact-lists/list_123/stats"


@pytest.mark.asyncio
async def test_list_contacts_are_scoped_to_the_list(client, stub_api):
    stub_api.add(201, envelope({"_id": "contact_1", "email": "a@example.com", "status": "active"}))
    stub_api.add(204)
    contacts = client.lists.contacts("list_123")
    assert contacts.list_id == "list_123"
    await contacts.create(email="a@example.com")
    await contacts.delete("contact_1")
    assert [(r.method, r.url.path) for r in stub_api.requests] == [
        ("POST", "/api/v1/contact-lists/list_123/contacts"),
        ("DELETE", "/api/v1/contact-lists/list_123/contacts/contact_1"),
    ]
