import os

# Keep test runs from writing logs/app.log
os.environ.setdefault("LOG_TO_FILE", "false")

import httpx
import pytest
from fastapi.testclient import TestClient

from places_proxy.core.config import Settings, get_settings
from places_proxy.main import app
from places_proxy.repos.places_repo import GooglePlacesRepository
from places_proxy.routes.places_route import get_places_repo

TEST_API_KEY = "test-key-123"

ACCRA_RECORD = {
    "place_id": "p1",
    "name": "Acme Realty",
    "geometry": {"location": {"lat": 5.61, "lng": -0.19}},
}


class UpstreamStub:
    """Deterministic stand-in for the Google Places endpoint that records every call."""

    def __init__(self, payload=None, status_code=200, error=None, raw_body=None):
        self.payload = payload if payload is not None else {"status": "OK", "results": [ACCRA_RECORD]}
        self.status_code = status_code
        self.error = error
        self.raw_body = raw_body
        self.calls = []

    @property
    def call_count(self):
        return len(self.calls)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error(f"upstream unreachable: {request.url}", request=request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)

    def repository(self, settings: Settings) -> GooglePlacesRepository:
        return GooglePlacesRepository(settings.PLACES_API_URL, transport=httpx.MockTransport(self.handler))


def make_settings(**overrides) -> Settings:
    values = {"GOOGLE_MAPS_API_KEY": TEST_API_KEY, "ENVIRONMENT": "production", "LOG_TO_FILE": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client_for():
    """Builds a TestClient wired to the given settings and upstream stub."""
    def _build(settings: Settings, stub: UpstreamStub) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_places_repo] = lambda: stub.repository(settings)
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_for, settings, upstream):
    return client_for(settings, upstream)
