"""
Fixtures for integration tests
"""

import httpx
import pytest
from httpx import AsyncClient

from app.core.config import Settings, get_settings
from app.core.dependencies import get_tapestry_client
from app.main import app
from app.services.tapestry_client import TapestryClient
from factories import TEST_API_KEY, TEST_BASE_URL


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, tapestry_api_key=TEST_API_KEY, tapestry_base_url=TEST_BASE_URL)


@pytest.fixture
async def client(fake_tapestry, test_settings):
    """
    HTTP client for testing API endpoints.

    Overrides the Tapestry dependency so every upstream call hits the fake.
    """
    async def override_get_tapestry_client():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(fake_tapestry),
            base_url=TEST_BASE_URL
        ) as http:
            yield TapestryClient(http, TEST_API_KEY)

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_tapestry_client] = override_get_tapestry_client

    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client():
    """HTTP client for an app running without TAPESTRY_API_KEY."""
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, tapestry_api_key=None)

    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
