"""Shared fixtures: an in-memory Redux API served through httpx.MockTransport."""

import json
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest

from redux.client import Client
from redux.transport.metrics import RequestMetrics


TEST_HOST = "https://redux.test"
TEST_TOKEN = "test-token-0123456789"


@dataclass
class RecordedRequest:
    """A request received by the fake API."""

    method: str
    path: str
    query: list[tuple[str, str]]
    body: dict[str, str]

    def query_values(self, key: str) -> list[str]:
        """All URL query values for a key, in order."""
        return [value for name, value in self.query if name == key]


def make_asset(index: int, channel: str = "bbcone") -> dict[str, Any]:
    """Asset JSON as the search endpoint returns it."""
    return {
        "uuid": f"00000000-0000-0000-0000-{index:012d}",
        "reference": str(5966413090093319525 + index),
        "name": f"Programme {index}",
        "description": f"Description {index}",
        "channel": {"name": channel, "display_name": "BBC One"},
        "start": f"2024-01-01T{6 + index // 60 % 18:02d}:{index % 60:02d}:00Z",
        "duration": 1800,
        "key": f"key-{index}",
    }


@dataclass
class FakeReduxApi:
    """Scriptable stand-in for the Redux HTTP API.

    Search returns slices of ``search_assets`` honouring ``offset`` and
    ``limit`` (server default 10) with ``total`` set to the full length.
    Any path in ``responses`` is answered by that handler instead.
    """

    search_assets: list[dict[str, Any]] = field(default_factory=list)
    responses: dict[str, Callable[[httpx.Request], httpx.Response]] = field(
        default_factory=dict
    )
    login_payload: dict[str, Any] = field(
        default_factory=lambda: {"token": TEST_TOKEN}
    )
    requests: list[RecordedRequest] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """MockTransport handler."""
        body = {
            key: values[-1]
            for key, values in parse_qs(
                request.content.decode("utf-8"), keep_blank_values=True
            ).items()
        }
        recorded = RecordedRequest(
            method=request.method,
            path=request.url.path,
            query=list(request.url.params.multi_items()),
            body=body,
        )
        self.requests.append(recorded)

        canned = self.responses.get(recorded.path)
        if canned is not None:
            return canned(request)

        if recorded.path == "/user/login":
            return httpx.Response(200, json=self.login_payload)
        if recorded.path == "/user/logout":
            return httpx.Response(200, text="")
        if recorded.path == "/asset/search":
            return self._search(recorded)
        return httpx.Response(404, text="not found")

    def _search(self, recorded: RecordedRequest) -> httpx.Response:
        offset = int(recorded.body.get("offset", "0"))
        limit = int(recorded.body.get("limit", "10"))
        page = self.search_assets[offset : offset + limit]
        return httpx.Response(
            200,
            json={
                "results": {"assets": page},
                "total": len(self.search_assets),
                "total_returned": len(page),
                "query_time": 0.01,
            },
        )

    def paths(self) -> list[str]:
        """Paths of every request received, in order."""
        return [recorded.path for recorded in self.requests]

    def respond(self, path: str, status_code: int, **kwargs: Any) -> None:
        """Answer every request to ``path`` with a fixed response."""
        self.responses[path] = lambda _request: httpx.Response(status_code, **kwargs)

    def respond_json(self, path: str, payload: Any) -> None:
        """Answer every request to ``path`` with a JSON body."""
        content = json.dumps(payload)
        self.responses[path] = lambda _request: httpx.Response(200, content=content)


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None, None, None]:
    """Give every test fresh request metrics."""
    RequestMetrics.reset()
    yield
    RequestMetrics.reset()


@pytest.fixture
def api() -> FakeReduxApi:
    """Fake Redux API with no search results."""
    return FakeReduxApi()


@pytest.fixture
def http_client(api: FakeReduxApi) -> Generator[httpx.Client, None, None]:
    """httpx client routed to the fake API."""
    with httpx.Client(transport=httpx.MockTransport(api.handle)) as client:
        yield client


@pytest.fixture
def client(http_client: httpx.Client) -> Client:
    """Redux client with an established token session."""
    return Client(token=TEST_TOKEN, host=TEST_HOST, http=http_client)


@pytest.fixture
def asset_json() -> Callable[..., dict[str, Any]]:
    """Factory for asset JSON payloads."""
    return make_asset


@pytest.fixture
def session_token() -> str:
    """Token the fake API issues and the ``client`` fixture uses."""
    return TEST_TOKEN


@pytest.fixture
def api_host() -> str:
    """Host the ``client`` fixture talks to."""
    return TEST_HOST
