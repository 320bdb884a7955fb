import json

import httpx
import pytest

from mailbreeze.client import MailBreeze
from mailbreeze.config import ClientConfig
from mailbreeze.executor import RequestExecutor

API_KEY = "test_key_do_not_leak_123"
BASE_URL = "https://api.example.com/api/v1"


class RecordingSleep:
    """Stands in for asyncio.sleep so retry delays can be asserted without waiting"""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


class StubAPI:
    """
    Scripted httpx.MockTransport handler.

    Queue responses (or exceptions) with ``add``; the last one queued is repeated once the queue runs dry.
    Every request seen is kept in ``requests``.
    """

    def __init__(self):
        self.requests = []
        self._script = []

    def add(self, status_code=200, json_body=None, headers=None, exc=None, content=None):
        self._script.append((status_code, json_body, headers, exc, content))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._script)) - 1
        status_code, json_body, headers, exc, content = self._script[index]
        if exc is not None:
            raise exc(f"simulated {exc.__name__}", request=request)
        if json_body is not None:
            return httpx.Response(status_code, json=json_body, headers=headers)
        return httpx.Response(status_code, content=content or b"", headers=headers)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def stub_api():
    return StubAPI()


@pytest.fixture
def sleeper():
    return RecordingSleep()


@pytest.fixture
def make_executor(stub_api, sleeper):
    def _make(**config_kwargs):
        config_kwargs.setdefault("backoff_jitter", 0)
        config = ClientConfig(
            api_key=API_KEY,
            base_url=BASE_URL,
            httpx_kwargs={"transport": httpx.MockTransport(stub_api)},
            **config_kwargs,
        )
        return RequestExecutor(config, sleep=sleeper)
    return _make


def envelope(data):
    return {"success": True, "data": data}


@pytest.fixture
def client(stub_api):
    return MailBreeze(API_KEY, base_url=BASE_URL, backoff_jitter=0,
                      httpx_kwargs={"transport": httpx.MockTransport(stub_api)})
