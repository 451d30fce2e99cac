"""Pytest fixtures for API tests.

Provides a TestClient for an app wired to the mock Speedy API.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from speedy_proxy.api.main import create_app
from speedy_proxy.config import ProxySettings
from speedy_proxy.services.transport import SpeedyTransport


@pytest.fixture
def client(
    settings: ProxySettings, transport: SpeedyTransport
) -> Generator[TestClient, None, None]:
    """TestClient for the proxy app with default credentials configured."""
    app = create_app(settings=settings, transport=transport)
    with TestClient(app) as test_client:
        yield test_client
