import pytest
from fastapi.testclient import TestClient

from app.api.routes import get_image_host, get_wolfram_client
from app.main import app
from tests.fakes import FakeImageHost, FakeWolframClient


@pytest.fixture
def fake_wolfram() -> FakeWolframClient:
    return FakeWolframClient()


@pytest.fixture
def fake_host() -> FakeImageHost:
    return FakeImageHost()


@pytest.fixture
def client(fake_wolfram: FakeWolframClient, fake_host: FakeImageHost):
    app.dependency_overrides[get_wolfram_client] = lambda: fake_wolfram
    app.dependency_overrides[get_image_host] = lambda: fake_host
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
