"""Shared fixtures: a fake Expo gateway behind httpx.MockTransport."""

import gzip
import json

import httpx
import pytest
import pytest_asyncio

from expo_push.client import AsyncPushClient, PushClient
from expo_push.config import ClientConfig
from expo_push.message import PushMessage

TOKEN = "ExponentPushToken[xxxxxxxxxxxxxxxxxxxxxx]"


class FakeGateway:
    """Answers like the push gateway and records every decoded request body."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.payloads: list = []
        self.fail_on: int | None = None
        self.fail_status = 500
        self.omit_ids: set[str] = set()
        self.override = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        raw = request.content
        if request.headers.get("content-encoding") == "gzip":
            raw = gzip.decompress(raw)
        payload = json.loads(raw)
        self.requests.append(request)
        self.payloads.append(payload)

        if self.fail_on == len(self.requests):
            return httpx.Response(self.fail_status, json={"errors": [{"code": "INTERNAL"}]})
        if self.override is not None:
            return self.override(request, payload)

        if request.url.path.endswith("/send"):
            data = [{"status": "ok", "id": f"id-{msg.get('body')}"} for msg in payload]
        else:
            data = {rid: {"status": "ok"} for rid in payload["ids"] if rid not in self.omit_ids}
        return httpx.Response(200, json={"data": data})

    @property
    def chunk_sizes(self) -> list[int]:
        return [len(p["ids"]) if isinstance(p, dict) else len(p) for p in self.payloads]


def make_messages(count: int) -> list[PushMessage]:
    return [PushMessage.new(TOKEN).with_body(str(i)) for i in range(count)]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest_asyncio.fixture
async def make_async_client(gateway):
    """Factory building AsyncPushClient instances wired to the fake gateway."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler))

    def _make(config: ClientConfig | None = None) -> AsyncPushClient:
        return AsyncPushClient(config=config, client=http)

    yield _make
    await http.aclose()


@pytest.fixture
def make_sync_client(gateway):
    http = httpx.Client(transport=httpx.MockTransport(gateway.handler))

    def _make(config: ClientConfig | None = None) -> PushClient:
        return PushClient(config=config, client=http)

    yield _make
    http.close()


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def messages():
    """Factory: messages(n) -> n messages whose bodies are their indexes."""
    return make_messages
