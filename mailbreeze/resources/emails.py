from typing import AsyncIterator, Optional

from ..models import (
    CancelEmailResult, Email, EmailList, EmailStats, EmailStatsResponse, ListEmailsParams, SendEmailParams,
    SendEmailResult,
)
from ..utils import iterate_pages
from .base import Resource, coerce_params


class Emails(Resource):
    """Emails API resource"""
    base_path = "/emails"

    async def send(self, params: Optional[SendEmailParams] = None, **fields) -> SendEmailResult:
        """
        Send an email.

        Either pass a SendEmailParams, or its fields as keywords (use ``from_`` for the sender):

            await client.emails.send(from_="me@example.com", to=["you@example.com"], subject="Hi", html="<p>Hi</p>")
        """
        params = coerce_params(SendEmailParams, params, fields)
        if not params.to:
            raise ValueError("At least one recipient is required")
        return await self._request("POST", self.base_path, body=params, response_model=SendEmailResult)

    async def get(self, email_id: str) -> Email:
        return await self._request("GET", self._path(email_id), response_model=Email)

    async def list(self, params: Optional[ListEmailsParams] = None, **fields) -> EmailList:
        """List sent emails, one page at a time, optionally filtered by status"""
        params = coerce_params(ListEmailsParams, params, fields)
        return await self._request("GET", self.base_path, query=params, response_model=EmailList)

    async def iterate(self, params: Optional[ListEmailsParams] = None, result_limit: int = None,
                      **fields) -> AsyncIterator[Email]:
        """Yield emails across all pages"""
        params = coerce_params(ListEmailsParams, params, fields)

        async def fetch_page(page: int) -> EmailList:
            return await self.list(params.model_copy(update={"page": page}))

        async for email in iterate_pages(fetch_page, start_page=params.page or 1, result_limit=result_limit):
            yield email

    async def stats(self) -> EmailStats:
        response = await self._request("GET", self._path("stats"), response_model=EmailStatsResponse)
        return response.stats

    async def cancel(self, email_id: str) -> CancelEmailResult:
        """Cancel an email that has not been sent yet"""
        return await self._request("POST", self._path(email_id, "cancel"), response_model=CancelEmailResult)
