import inspect
from collections import defaultdict

import httpx
import pytest

from killingpart.common.events import AppEvent, EventBus
from killingpart.common.http.client import APIClient
from killingpart.modules.auth.adapters.token_store import InMemoryKeyValueStore, TokenStore

BASE_URL = "https://api.killingpart.test"
MUSIC_BASE_URL = "https://music.killingpart.test/api"


def reply(status_code: int = 200, **kwargs):
    """Handler that builds a fresh response on every call."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **kwargs)
    return handler


class FakeBackend:
    """Routes requests by method and path, keeping every request it saw.

    Handlers registered for a route are used in order; the last one repeats.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list] = defaultdict(list)

    def add(self, method: str, path: str, *handlers) -> None:
        self._routes[(method, path)].extend(handlers)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handlers = self._routes.get((request.method, request.url.path))
        if not handlers:
            return httpx.Response(404, json={"message": "no route"})
        handler = handlers.pop(0) if len(handlers) > 1 else handlers[0]
        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response


class EventRecorder:
    def __init__(self, events: EventBus):
        self.received: list[AppEvent] = []
        for event in AppEvent:
            events.subscribe(event, self.received.append)

    def count(self, event: AppEvent) -> int:
        return self.received.count(event)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore(InMemoryKeyValueStore())


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded_events(events) -> EventRecorder:
    return EventRecorder(events)


@pytest.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as client:
        yield client


@pytest.fixture
def api_client(http_client, token_store, events) -> APIClient:
    return APIClient(http_client, token_store, events, base_url=BASE_URL)
