"""
Pytest configuration and fixtures for queue service tests.
"""

import os
import tempfile
from typing import Any, Dict, List

import httpx
import pytest

# Set test environment variables before importing modules
os.environ.setdefault("STORE_LIST_API_URL", "https://upstream.test/storelist")
os.environ.setdefault("QUEUE_API_URL", "https://upstream.test/queue")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "queue-service-test-logs"))

from common.config import QueueServiceSettings  # noqa: E402

STORE_LIST_URL = "https://upstream.test/storelist"
QUEUE_URL = "https://upstream.test/queue"


def make_store_entry(store_id: int, **overrides: Any) -> Dict[str, Any]:
    """Return an upstream store-list row."""
    entry = {
        "id": store_id,
        "name": f"分店 {store_id}",
        "nameEn": f"Store {store_id}",
        "address": f"{store_id} Nathan Road",
        "region": "九龍",
        "area": "油尖旺區",
        "latitude": 22.30,
        "longitude": 114.17,
        "storeStatus": "OPEN",
        "waitingGroup": 10,
    }
    entry.update(overrides)
    return entry


def make_queue_entry(store_id: int, tickets: List[str], waiting_group: int | None = None) -> Dict[str, Any]:
    """Return an upstream queue payload."""
    return {
        "shopId": store_id,
        "storeQueue": tickets,
        "storeStatus": "OPEN",
        "waitingGroup": waiting_group,
    }


class FakeUpstream:
    """
    In-memory stand-in for both upstream feeds, served through httpx.MockTransport.

    ``queues`` maps store id to the queue behavior:
        - dict: 200 with that JSON body
        - int: bare response with that status code (404 = no queue data)
        - Exception: raised from the transport (network failure)
    Stores without an entry answer 404.
    """

    def __init__(self) -> None:
        self.store_list: Any = []
        self.store_list_status = 200
        self.store_list_error: Exception | None = None
        self.queues: Dict[int, Any] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/storelist":
            if self.store_list_error is not None:
                raise self.store_list_error
            return httpx.Response(self.store_list_status, json=self.store_list)

        if request.url.path == "/queue":
            store_id = int(request.url.params["storeid"])
            behavior = self.queues.get(store_id, 404)
            if isinstance(behavior, Exception):
                raise behavior
            if isinstance(behavior, int):
                return httpx.Response(behavior)
            return httpx.Response(200, json=behavior)

        return httpx.Response(500)

    @property
    def queue_requests(self) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.path == "/queue"]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> QueueServiceSettings:
    """Queue service settings pointing at the fake upstream, without chunk delays."""
    return QueueServiceSettings(
        STORE_LIST_API_URL=STORE_LIST_URL,
        QUEUE_API_URL=QUEUE_URL,
        CORS_PROXY_URL="",
        QUEUE_CHUNK_DELAY_SECONDS=0,
        UPSTREAM_TIMEOUT_SECONDS=1.0,
        ALLOWED_ORIGINS="http://localhost:3000,https://dashboard.example.com",
        API_SECRET_KEY="",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def network_error() -> httpx.ConnectError:
    return httpx.ConnectError("Connection refused")


@pytest.fixture
def store_entry():
    """Factory for upstream store-list rows."""
    return make_store_entry


@pytest.fixture
def queue_entry():
    """Factory for upstream queue payloads."""
    return make_queue_entry
