"""Root-level pytest fixtures for all tests.

Provides the mock Speedy API, a transport wired to it, and settings with
process-wide test credentials.
"""

import httpx
import pytest

from speedy_proxy.config import ProxySettings, SpeedyConfig
from speedy_proxy.services.speedy_constants import SPEEDY_BASE_URL
from speedy_proxy.services.speedy_gateway import SpeedyGateway
from speedy_proxy.services.transport import SpeedyTransport
from tests.helpers.mock_speedy import MockSpeedyAPI


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external services"
    )


@pytest.fixture
def mock_speedy() -> MockSpeedyAPI:
    """Fresh mock Speedy API with no configured endpoints."""
    return MockSpeedyAPI()


@pytest.fixture
def speedy_config() -> SpeedyConfig:
    """Speedy settings with process-wide credentials."""
    return SpeedyConfig(username="env-user", password="env-pass")


@pytest.fixture
def settings(speedy_config: SpeedyConfig) -> ProxySettings:
    """Full settings around speedy_config."""
    return ProxySettings(speedy=speedy_config)


@pytest.fixture
def transport(mock_speedy: MockSpeedyAPI) -> SpeedyTransport:
    """SpeedyTransport whose client talks to the mock."""
    client = httpx.AsyncClient(transport=mock_speedy, base_url=SPEEDY_BASE_URL)
    return SpeedyTransport(client=client)


@pytest.fixture
def gateway(speedy_config: SpeedyConfig, transport: SpeedyTransport) -> SpeedyGateway:
    """Gateway with default credentials, backed by the mock."""
    return SpeedyGateway(speedy_config, transport)
