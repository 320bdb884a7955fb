from typing import Iterable, List

from ..models import (
    BatchVerificationResult, VerificationListItem, VerificationListResponse, VerificationResult, VerificationStats,
)
from .base import Resource


class Verification(Resource):
    """Email verification API resource"""
    base_path = "/email-verification"

    async def verify(self, email: str) -> VerificationResult:
        """Verify a single address synchronously"""
        if not email:
            raise ValueError("email must not be empty")
        return await self._request("POST", self._path("single"), body={"email": email},
                                   response_model=VerificationResult)

    async def batch(self, emails: Iterable[str]) -> BatchVerificationResult:
        """
        Verify many addresses at once.

        Batches made entirely of cached addresses complete immediately and carry ``results``; otherwise poll
        ``get(result.verification_id)`` until ``status`` is ``completed``.
        """
        if isinstance(emails, str):
            raise TypeError("emails must be a collection of addresses, not a single string")
        emails = list(emails)
        if not emails:
            raise ValueError("At least one email is required")
        return await self._request("POST", self._path("batch"), body={"emails": emails},
                                   response_model=BatchVerificationResult)

    async def get(self, verification_id: str) -> BatchVerificationResult:
        return await self._request("GET", self._path(verification_id), response_model=BatchVerificationResult)

    async def list(self) -> List[VerificationListItem]:
        response = await self._request("GET", self.base_path, response_model=VerificationListResponse)
        return response.items

    async def stats(self) -> VerificationStats:
        return await self._request("GET", self._path("stats"), response_model=VerificationStats)
