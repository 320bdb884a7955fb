import math
import random
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, List, Optional, Tuple

from tenacity import RetryCallState
from tenacity.wait import wait_base

from .exceptions import MailBreezeError

import logging
import structlog

_logger = logging.getLogger(__name__)
log = structlog.wrap_logger(_logger)


def compute_backoff(retry_index: int, base: float, ceiling: float, jitter: float = 0.0, rng=random) -> float:
    """
    Delay in seconds before retry number ``retry_index`` (0 for the first retry).

    The exponential delay ``base * 2 ** retry_index`` is capped at ``ceiling``; jitter adds a uniformly
    distributed fraction (up to ``jitter``) of that delay, and the total never exceeds ``ceiling``.
    """
    retry_index = max(int(retry_index), 0)
    try:
        delay = min(base * (2 ** retry_index), ceiling)
    except OverflowError:
        delay = ceiling
    if jitter > 0 and delay > 0:
        delay += rng.uniform(0, jitter * delay)
    return min(delay, ceiling)


class wait_backoff(wait_base):
    """
    Tenacity wait strategy: exponential backoff with jitter, except when the failed attempt was
    rate limited and the server said how long to wait.
    """

    def __init__(self, base: float, ceiling: float, jitter: float = 0.0, rng=random):
        self.base = base
        self.ceiling = ceiling
        self.jitter = jitter
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        exc = outcome.exception() if outcome is not None and outcome.failed else None
        if isinstance(exc, MailBreezeError) and exc.retry_after is not None and math.isfinite(exc.retry_after):
            return max(float(exc.retry_after), 0.0)
        # attempt_number is 1 after the first attempt, which precedes retry index 0
        return compute_backoff(retry_state.attempt_number - 1, self.base, self.ceiling, self.jitter, self.rng)


def build_query_params(params: Optional[Iterable[Tuple[str, Any]]]) -> List[Tuple[str, str]]:
    """Render ordered key/value pairs as query string pairs, skipping unset values"""
    query = []
    for key, value in params or ():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            value = "true" if value else "false"
        query.append((key, str(value)))
    return query


async def iterate_pages(fetch_page: Callable[[int], Awaitable[Any]],
                        start_page: int = 1,
                        result_limit: int = None) -> AsyncIterator[Any]:
    """
    Yield every item of a paginated list endpoint.

    ``fetch_page`` receives a page number and returns a response model exposing ``items`` and
    ``pagination``. Stops when the server reports no next page, a page comes back empty, the
    server hands back a page that was already fetched, or ``result_limit`` items were yielded.
    """
    result_limit = int(result_limit or 0)
    request_log = log.new(start_page=start_page)
    if result_limit:
        request_log = request_log.bind(result_limit=result_limit)
    page = start_page
    seen_pages = set()
    yielded = 0
    while True:
        response = await fetch_page(page)
        pagination = response.pagination
        current = pagination.page if pagination is not None and pagination.page else page
        if current in seen_pages:
            request_log.error("Pagination failure: server repeated a page", page=current)
            break
        seen_pages.add(current)
        items = response.items
        for item in items:
            yield item
            yielded += 1
            if result_limit and yielded >= result_limit:
                request_log.debug("Pagination complete", result_count=yielded, reason="result_limit")
                return
        if not items or pagination is None or not pagination.has_next:
            break
        request_log.debug("Continuing pagination", page=current + 1, result_count=yielded)
        page = current + 1
    request_log.debug("Pagination complete", result_count=yielded)
