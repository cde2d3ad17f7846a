import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services.app_context import build_context


@pytest.fixture
def settings():
    return Settings(rider_name="Alice", default_distance_km=5)


@pytest.fixture
def context(settings):
    return build_context(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
