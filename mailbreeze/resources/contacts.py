from typing import AsyncIterator, Optional, Union

from ..executor import RequestExecutor
from ..models import (
    Contact, ContactList, CreateContactParams, ListContactsParams, SubscriptionResult, SuppressParams, SuppressReason,
    UpdateContactParams,
)
from ..utils import iterate_pages
from .base import Resource, coerce_params, path_segment


class Contacts(Resource):
    """
    Contacts API resource.

    Every contact operation happens inside one mailing list, so instances are scoped to a list id;
    get one with ``client.contacts(list_id)``.
    """

    def __init__(self, executor: RequestExecutor, list_id: str):
        super().__init__(executor)
        self.list_id = list_id
        self.base_path = f"/contact-lists/{path_segment(list_id)}/contacts"

    async def create(self, params: Optional[CreateContactParams] = None, **fields) -> Contact:
        params = coerce_params(CreateContactParams, params, fields)
        return await self._request("POST", self.base_path, body=params, response_model=Contact)

    async def get(self, contact_id: str) -> Contact:
        return await self._request("GET", self._path(contact_id), response_model=Contact)

    async def update(self, contact_id: str, params: Optional[UpdateContactParams] = None, **fields) -> Contact:
        params = coerce_params(UpdateContactParams, params, fields)
        return await self._request("PATCH", self._path(contact_id), body=params, response_model=Contact)

    async def delete(self, contact_id: str) -> None:
        await self._request("DELETE", self._path(contact_id))

    async def list(self, params: Optional[ListContactsParams] = None, **fields) -> ContactList:
        params = coerce_params(ListContactsParams, params, fields)
        return await self._request("GET", self.base_path, query=params, response_model=ContactList)

    async def iterate(self, params: Optional[ListContactsParams] = None, result_limit: int = None,
                      **fields) -> AsyncIterator[Contact]:
        """Yield the list's contacts across all pages"""
        params = coerce_params(ListContactsParams, params, fields)

        async def fetch_page(page: int) -> ContactList:
            return await self.list(params.model_copy(update={"page": page}))

        async for contact in iterate_pages(fetch_page, start_page=params.page or 1, result_limit=result_limit):
            yield contact

    async def suppress(self, contact_id: str, reason: Union[SuppressReason, str] = SuppressReason.MANUAL) -> Contact:
        """Stop all sending to a contact, recording why"""
        body = SuppressParams(reason=reason)
        return await self._request("POST", self._path(contact_id, "suppress"), body=body, response_model=Contact)

    async def unsubscribe(self, contact_id: str) -> SubscriptionResult:
        return await self._request("POST", self._path(contact_id, "unsubscribe"), response_model=SubscriptionResult)

    async def resubscribe(self, contact_id: str) -> SubscriptionResult:
        return await self._request("POST", self._path(contact_id, "resubscribe"), response_model=SubscriptionResult)
