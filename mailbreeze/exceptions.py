from enum import Enum
from typing import Any, Dict, List, Optional

import httpx


class ErrorKind(str, Enum):
    """Closed set of failure kinds a MailBreeze call can end in"""
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    TIMEOUT = "timeout"
    BAD_REQUEST = "bad_request"


TRANSIENT_KINDS = frozenset({
    ErrorKind.RATE_LIMIT,
    ErrorKind.SERVER_ERROR,
    ErrorKind.NETWORK,
    ErrorKind.TIMEOUT,
})


class MailBreezeError(Exception):
    """
    Every failure surfaced by the SDK.

    The error is a tagged union: ``kind`` says which variant it is, and only the
    attributes belonging to that variant are populated:

    * ``RATE_LIMIT``: ``retry_after`` (seconds, may be None)
    * ``VALIDATION``: ``errors`` (field name -> list of messages)
    * ``SERVER_ERROR`` / ``BAD_REQUEST``: ``status_code``
    * ``NETWORK`` / ``TIMEOUT``: ``cause`` (the underlying transport exception)

    Redirects are not followed, so a 3xx response also ends up as ``BAD_REQUEST``
    (terminal) with its ``status_code``; that usually means ``base_url`` is wrong.

    Request headers are never attached, so the API key cannot leak through an error.
    """

    def __init__(self,
                 kind: ErrorKind,
                 message: str,
                 *,
                 status_code: Optional[int] = None,
                 code: Optional[str] = None,
                 retry_after: Optional[float] = None,
                 errors: Optional[Dict[str, List[str]]] = None,
                 cause: Optional[BaseException] = None,
                 retryable: Optional[bool] = None,
                 ):
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.retry_after = retry_after
        self.errors = errors if errors is not None else {}
        self.cause = cause
        self.retryable = self.kind in TRANSIENT_KINDS if retryable is None else retryable

    @property
    def is_retryable(self) -> bool:
        return self.retryable

    def __str__(self):
        if self.status_code is not None:
            return f"{self.kind.value} ({self.status_code}): {self.message}"
        return f"{self.kind.value}: {self.message}"

    def __repr__(self):
        fields = [f"kind={self.kind.value!r}", f"message={self.message!r}"]
        if self.status_code is not None:
            fields.append(f"status_code={self.status_code}")
        if self.code:
            fields.append(f"code={self.code!r}")
        if self.kind is ErrorKind.RATE_LIMIT:
            fields.append(f"retry_after={self.retry_after!r}")
        if self.errors:
            fields.append(f"errors={self.errors!r}")
        if self.cause is not None:
            fields.append(f"cause={type(self.cause).__name__}")
        return f"MailBreezeError({', '.join(fields)})"


def _normalize_field_errors(raw: Any) -> Dict[str, List[str]]:
    if not isinstance(raw, dict):
        return {}
    errors = {}
    for field, messages in raw.items():
        if isinstance(messages, (list, tuple)):
            errors[str(field)] = [str(m) for m in messages]
        elif messages is not None:
            errors[str(field)] = [str(messages)]
    return errors


def _message_and_code(payload: Any, fallback: str):
    if not isinstance(payload, dict):
        return fallback, None
    code = payload.get("code")
    error = payload.get("error")
    if isinstance(error, dict):
        # {"success": false, "error": {"code": ..., "message": ...}}
        code = error.get("code", code)
        message = error.get("message") or payload.get("message") or fallback
    else:
        message = error or payload.get("message") or fallback
    return str(message), (str(code) if code is not None else None)


def error_from_status(status_code: int, payload: Any = None, retry_after: Optional[float] = None,
                      reason: Optional[str] = None) -> MailBreezeError:
    """Map a non-2xx status code and its decoded body onto the error taxonomy"""
    message, code = _message_and_code(payload, reason or "Unknown error")
    if status_code in (401, 403):
        return MailBreezeError(ErrorKind.AUTHENTICATION, message, status_code=status_code, code=code)
    if status_code == 404:
        return MailBreezeError(ErrorKind.NOT_FOUND, message, status_code=status_code, code=code)
    if status_code == 422:
        errors = {}
        if isinstance(payload, dict):
            raw = payload.get("errors")
            if raw is None and isinstance(payload.get("error"), dict):
                raw = payload["error"].get("details")
            errors = _normalize_field_errors(raw)
        return MailBreezeError(ErrorKind.VALIDATION, message, status_code=status_code, code=code, errors=errors)
    if status_code == 429:
        return MailBreezeError(ErrorKind.RATE_LIMIT, message, status_code=status_code, code=code,
                               retry_after=retry_after)
    if status_code >= 500:
        return MailBreezeError(ErrorKind.SERVER_ERROR, message, status_code=status_code, code=code)
    return MailBreezeError(ErrorKind.BAD_REQUEST, message, status_code=status_code, code=code)


def error_from_transport(exc: httpx.RequestError) -> MailBreezeError:
    """Classify an exception raised by httpx before a response was received"""
    if isinstance(exc, httpx.TimeoutException):
        return MailBreezeError(ErrorKind.TIMEOUT, f"Request timed out: {exc}", cause=exc)
    if isinstance(exc, httpx.TransportError):
        return MailBreezeError(ErrorKind.NETWORK, f"Connection error: {exc}", cause=exc)
    # Redirect loops, undecodable content and the like will not improve on retry
    return MailBreezeError(ErrorKind.NETWORK, f"Request failed: {exc}", cause=exc, retryable=False)


def malformed_response(exc: Exception, status_code: Optional[int] = None) -> MailBreezeError:
    return MailBreezeError(ErrorKind.NETWORK, f"Malformed response body: {exc}",
                           status_code=status_code, cause=exc, retryable=False)
