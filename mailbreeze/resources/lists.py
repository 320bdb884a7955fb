from typing import AsyncIterator, Optional

from ..models import CreateListParams, ListListsParams, ListsResponse, ListStats, MailingList, UpdateListParams
from ..utils import iterate_pages
from .base import Resource, coerce_params
from .contacts import Contacts


class Lists(Resource):
    """Mailing lists API resource"""
    base_path = "/contact-lists"

    async def create(self, params: Optional[CreateListParams] = None, **fields) -> MailingList:
        params = coerce_params(CreateListParams, params, fields)
        return await self._request("POST", self.base_path, body=params, response_model=MailingList)

    async def list(self, params: Optional[ListListsParams] = None, **fields) -> ListsResponse:
        params = coerce_params(ListListsParams, params, fields)
        return await self._request("GET", self.base_path, query=params, response_model=ListsResponse)

    async def iterate(self, params: Optional[ListListsParams] = None, result_limit: int = None,
                      **fields) -> AsyncIterator[MailingList]:
        params = coerce_params(ListListsParams, params, fields)

        async def fetch_page(page: int) -> ListsResponse:
            return await self.list(params.model_copy(update={"page": page}))

        async for mailing_list in iterate_pages(fetch_page, start_page=params.page or 1, result_limit=result_limit):
            yield mailing_list

    async def get(self, list_id: str) -> MailingList:
        return await self._request("GET", self._path(list_id), response_model=MailingList)

    async def update(self, list_id: str, params: Optional[UpdateListParams] = None, **fields) -> MailingList:
        params = coerce_params(UpdateListParams, params, fields)
        return await self._request("PATCH", self._path(list_id), body=params, response_model=MailingList)

    async def delete(self, list_id: str) -> None:
        await self._request("DELETE", self._path(list_id))

    async def stats(self, list_id: str) -> ListStats:
        return await self._request("GET", self._path(list_id, "stats"), response_model=ListStats)

    def contacts(self, list_id: str) -> Contacts:
        """Contacts of one list. Adding a contact to the list is ``create``, removing it is ``delete``."""
        return Contacts(self._executor, list_id)
