import json
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional, Type, Union

import httpx
from pydantic import BaseModel, ValidationError

from .exceptions import MailBreezeError, error_from_status, malformed_response


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """Parse a Retry-After header given either as delta-seconds or as an HTTP-date"""
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        # "inf", "nan" and overflowing values like "1e400" all parse as floats
        if not math.isfinite(seconds) or seconds < 0:
            return None
        return seconds
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max((when - now).total_seconds(), 0.0)


def unwrap_envelope(content: Any) -> Any:
    """Strip the {"success": ..., "data": ...} wrapper the API puts around payloads"""
    if isinstance(content, dict) and "success" in content and "data" in content:
        return content["data"]
    return content


class APIResponse:
    """Wraps an httpx.Response and turns it into either a decoded payload or a MailBreezeError"""
    response: httpx.Response
    response_model: Optional[Type[BaseModel]] = None
    content_type: str

    def __init__(self, response: httpx.Response, response_model: Optional[Type[BaseModel]] = None):
        self.response = response
        self.response_model = response_model
        self.content_type = response.headers.get('Content-Type', '')

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def is_success(self) -> bool:
        return self.response.is_success

    @property
    def retry_after(self) -> Optional[float]:
        return parse_retry_after(self.response.headers.get('Retry-After'))

    def _raw_content(self) -> Any:
        """Decoded JSON body, or None when the body is empty"""
        if not self.response.content or not self.response.content.strip():
            return None
        return self.response.json()

    def is_json(self) -> bool:
        return 'json' in self.content_type

    def content(self) -> Union[BaseModel, dict, list, Any]:
        """Decode a successful response, raising a terminal error if the body is malformed"""
        if self.response_model is None and self.content_type and not self.is_json():
            # Non-API endpoints such as pre-signed storage URLs
            if 'text/' in self.content_type or 'xml' in self.content_type:
                return self.response.text or None
            return self.response.content or None
        try:
            content = unwrap_envelope(self._raw_content())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise malformed_response(e) from e
        if self.response_model is None:
            return content
        if content is None:
            raise malformed_response(ValueError("empty response body"))
        try:
            return self.response_model.model_validate(content)
        except ValidationError as e:
            raise malformed_response(e) from e

    def error(self) -> MailBreezeError:
        """Classify an unsuccessful response"""
        try:
            payload = self._raw_content()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = {"message": self.response.text} if self.response.text else None
        return error_from_status(self.status_code, payload, retry_after=self.retry_after,
                                 reason=self.response.reason_phrase)
