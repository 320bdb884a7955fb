import asyncio
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

import httpx
from aiolimiter import AsyncLimiter
from pydantic import BaseModel
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

from .auth import AuthStrategy, BearerTokenAuth
from .config import ClientConfig
from .exceptions import MailBreezeError, error_from_transport
from .response import APIResponse
from .utils import build_query_params, wait_backoff

import logging
import structlog

_logger = logging.getLogger(__name__)
log = structlog.wrap_logger(_logger)


@dataclass(frozen=True)
class RequestDescriptor:
    """One API call, before it is issued"""
    method: str
    path: str
    params: Tuple[Tuple[str, Any], ...] = ()
    body: Any = None
    content: Optional[bytes] = None
    headers: Tuple[Tuple[str, str], ...] = ()
    authenticated: bool = True


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, MailBreezeError) and exc.is_retryable


class RequestExecutor:
    """Issues API calls with timeout, retry and backoff, and classifies every failure"""

    def __init__(self,
                 config: ClientConfig,
                 *,
                 auth_strategy: Optional[AuthStrategy] = None,
                 sleep=asyncio.sleep,
                 rng=None,
                 ):
        self.config = config
        self.auth_strategy = auth_strategy or BearerTokenAuth(config.api_key)
        self._sleep = sleep
        self._rng = rng
        self._limiter = AsyncLimiter(config.requests_per_second, time_period=1) if config.requests_per_second else None
        self.client = httpx.AsyncClient(**config.client_params)

    def __repr__(self):
        return f"{type(self).__name__}(config={self.config!r})"

    async def aclose(self):
        await self.client.aclose()

    def log_verbose(self, msg, logger=None, **kwargs):
        if not logger:
            logger = log
        if self.config.verbose:
            logger.debug(msg, **kwargs)

    def build_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        kwargs = {}
        query = build_query_params(descriptor.params)
        if query:
            kwargs["params"] = query
        if descriptor.body is not None:
            kwargs["json"] = descriptor.body
        elif descriptor.content is not None:
            kwargs["content"] = descriptor.content
        if descriptor.headers:
            kwargs["headers"] = dict(descriptor.headers)
        request = self.client.build_request(method=descriptor.method, url=descriptor.path, **kwargs)
        if descriptor.authenticated:
            self.auth_strategy.authenticate(request)
        return request

    async def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            if self._limiter is not None:
                async with self._limiter:
                    return await self.client.send(request)
            return await self.client.send(request)
        except httpx.RequestError as e:
            raise error_from_transport(e) from e

    async def _attempt(self, descriptor: RequestDescriptor, response_model: Optional[Type[BaseModel]], logger):
        # A fresh request per attempt; httpx requests are not reusable once streamed
        request = self.build_request(descriptor)
        response = await self._send(request)
        self.log_verbose("Received response", status_code=response.status_code, logger=logger)
        response_obj = APIResponse(response=response, response_model=response_model)
        if not response_obj.is_success:
            raise response_obj.error()
        return response_obj.content()

    def _retrying(self, logger) -> AsyncRetrying:
        config = self.config

        def before_sleep(retry_state: RetryCallState):
            exc = retry_state.outcome.exception()
            logger.warning(
                "Retrying request",
                error_kind=exc.kind.value,
                error=str(exc),
                attempt=retry_state.attempt_number,
                max_retries=config.max_retries,
                delay=round(retry_state.next_action.sleep, 3),
                elapsed=round(retry_state.seconds_since_start or 0.0, 3),
            )

        wait_kwargs = {"rng": self._rng} if self._rng is not None else {}
        return AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(config.max_retries + 1),
            wait=wait_backoff(config.backoff_base, config.backoff_max, config.backoff_jitter, **wait_kwargs),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep,
            reraise=True,
        )

    async def execute(self, descriptor: RequestDescriptor, response_model: Optional[Type[BaseModel]] = None) -> Any:
        """
        Perform one logical API call.

        Args:
            descriptor (RequestDescriptor): What to send; ``path`` is relative to the configured base URL.
            response_model (Optional[Type[BaseModel]]): Model the (unwrapped) success payload is validated into.
                When omitted the decoded JSON is returned as-is, or None for an empty body.

        Returns:
            The decoded success payload.

        Raises:
            MailBreezeError: The classified failure. Transient failures are retried up to ``max_retries`` times
                first, and the error from the final attempt is the one raised.
        """
        __logger = log.new(method=descriptor.method, path=descriptor.path)
        __logger.debug("Sending request")
        try:
            async for attempt in self._retrying(__logger):
                with attempt:
                    result = await self._attempt(descriptor, response_model, __logger)
        except MailBreezeError as e:
            if e.is_retryable and self.config.max_retries > 0:
                __logger.error(f"Exceeded maximum retries ({self.config.max_retries})", error_kind=e.kind.value)
            else:
                __logger.debug("Request failed", error_kind=e.kind.value, status_code=e.status_code)
            raise
        return result
