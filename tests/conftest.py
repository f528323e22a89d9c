"""Shared fixtures for the proxy tests."""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, ProxySettings, YnabSettings


class RecordingLogger:
    """RequestLogger double that keeps every call."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, int, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, method: str, path: str, status: int, *, outcome: str) -> None:
        self.requests.append((method, path, status, outcome))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


class FakeYnab:
    """Upstream double served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"data": {"categories": []}}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responder(request)
        # Responses built with content= are already read; real transports hand back an unread stream
        return httpx.Response(
            response.status_code,
            headers=response.headers.multi_items(),
            stream=httpx.ByteStream(response.content),
        )


@pytest.fixture
def config():
    return Config(
        proxy=ProxySettings(debug=False),
        ynab=YnabSettings(token="secret", budget_id="abc123"),
    )


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def ynab():
    return FakeYnab()


@pytest.fixture
def make_client(logger, ynab):
    """Build a TestClient for a given config, with lifespan running."""
    clients = []

    def _make(config: Config) -> TestClient:
        app = create_app(config, logger, transport=httpx.MockTransport(ynab))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, config):
    return make_client(config)
