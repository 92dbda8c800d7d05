"""
Pytest configuration and fixtures for the sweagle_step tests.
"""

from typing import Callable, List, Tuple
from unittest.mock import AsyncMock

import httpx
import pytest

from sweagle_step.application.domain import (
    ConfigService,
    ProgressSink,
    ServiceEndpoint,
)
from sweagle_step.application.service import ConfigStepService
from sweagle_step.infrastructure.api_client import HttpConfigService
from sweagle_step.infrastructure.host import RaisingJobControl, StaticSecret


class RecordingSink(ProgressSink):
    """Collects progress lines so tests can assert on them."""

    def __init__(self):
        self.lines: List[Tuple[str, str]] = []

    def info(self, message: str):
        self.lines.append(("info", message))

    def debug(self, message: str):
        self.lines.append(("debug", message))

    def error(self, message: str):
        self.lines.append(("error", message))

    def at(self, level: str) -> List[str]:
        return [message for lvl, message in self.lines if lvl == level]


@pytest.fixture
def sample_token() -> str:
    return "3f1c2a9e-token"


@pytest.fixture
def endpoint(sample_token) -> ServiceEndpoint:
    """Return an endpoint for a fake tenant."""
    return ServiceEndpoint(
        base_url="https://tenant.sweagle.test",
        credential=StaticSecret(sample_token),
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def mock_config_service():
    """Return a mock ConfigService port."""
    return AsyncMock(spec=ConfigService)


@pytest.fixture
def step_service(mock_config_service, sink) -> ConfigStepService:
    return ConfigStepService(
        config_service=mock_config_service,
        sink=sink,
        job=RaisingJobControl(),
    )


@pytest.fixture
def http_service() -> Callable[[Callable], HttpConfigService]:
    """Create an HttpConfigService whose requests are answered by a handler."""

    def _create(handler: Callable[[httpx.Request], httpx.Response]):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpConfigService(client)

    return _create


@pytest.fixture
def captured():
    """Return a handler factory that records requests and replies."""

    def _create(status_code: int = 200, text: str = ""):
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, text=text)

        return handler, requests

    return _create
