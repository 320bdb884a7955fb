from typing import Optional

from ..executor import RequestDescriptor
from ..models import Attachment, CreateUploadParams, UploadUrl
from .base import Resource, coerce_params


class Attachments(Resource):
    """Attachments API resource"""
    base_path = "/attachments"

    async def create_upload_url(self, params: Optional[CreateUploadParams] = None, **fields) -> UploadUrl:
        """Reserve an attachment id and get a pre-signed URL to PUT its bytes to"""
        params = coerce_params(CreateUploadParams, params, fields)
        return await self._request("POST", self._path("upload"), body=params, response_model=UploadUrl)

    async def confirm(self, attachment_id: str) -> Attachment:
        """Tell the API the upload to the pre-signed URL has finished"""
        return await self._request("POST", self._path(attachment_id, "confirm"), response_model=Attachment)

    async def get(self, attachment_id: str) -> Attachment:
        return await self._request("GET", self._path(attachment_id), response_model=Attachment)

    async def delete(self, attachment_id: str) -> None:
        await self._request("DELETE", self._path(attachment_id))

    async def upload(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> Attachment:
        """
        Upload a file in one go: reserve an upload URL, PUT the bytes, then confirm.

        The pre-signed URL already carries its own authorization, so the API key is not sent to it.
        Returns the confirmed attachment; pass its ``id`` in ``SendEmailParams.attachment_ids``.
        """
        upload_url = await self.create_upload_url(filename=filename, content_type=content_type, size=len(content))
        descriptor = RequestDescriptor(
            method="PUT",
            path=upload_url.upload_url,
            content=content,
            headers=(("Content-Type", content_type),),
            authenticated=False,
        )
        await self._executor.execute(descriptor)
        return await self.confirm(upload_url.attachment_id)
