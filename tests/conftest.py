"""
Shared fixtures for the eink-hub test suite.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from eink_hub.config import MEMORY_DATABASE_URL, ServerConfig
from eink_hub.dependencies import get_device_repository
from eink_hub.identifiers import IdentifierSource
from eink_hub.main import create_app

LOGO_URL = "https://example.com/logo.png"
MAC = "AA:BB:CC:DD:EE:FF"


class FixedIdentifierSource(IdentifierSource):
    """Hands out AAAAAA, BBBBBB, ... and matching predictable API keys."""

    def __init__(self) -> None:
        self.issued = 0

    def friendly_id(self) -> str:
        letter = chr(ord("A") + self.issued % 26)
        self.issued += 1
        return letter * 6

    def api_key(self) -> str:
        return f"key{self.issued:019d}"


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(database_url=MEMORY_DATABASE_URL, setup_logo_url=LOGO_URL)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.state.identifiers = FixedIdentifierSource()
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Client backed by the in-memory repository."""
    return TestClient(app)


@pytest.fixture
def mock_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_client(app, mock_repo) -> TestClient:
    """Client whose repository is an AsyncMock."""
    app.dependency_overrides[get_device_repository] = lambda: mock_repo
    return TestClient(app)


def register(client: TestClient, mac: str = None) -> dict:
    """Run the setup flow and return the JSON body."""
    headers = {"ID": mac} if mac else {}
    response = client.get("/api/setup", headers=headers)
    assert response.status_code == 200
    return response.json()


def check_in(client: TestClient, api_key: str, **headers: str) -> dict:
    """Run the display flow and return the JSON body."""
    response = client.get("/api/display", headers={"Access-Token": api_key, **headers})
    assert response.status_code == 200
    return response.json()
