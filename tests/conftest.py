"""
Pytest fixtures and configuration for all tests.
"""

from typing import AsyncGenerator

import httpx
import pytest

from app.services.tapestry_client import TapestryClient
from factories import FakeTapestry, TEST_API_KEY, TEST_BASE_URL, TEST_WALLET


@pytest.fixture
def fake_tapestry() -> FakeTapestry:
    """Fresh fake upstream per test."""
    return FakeTapestry()


@pytest.fixture
async def tapestry_client(fake_tapestry) -> AsyncGenerator[TapestryClient, None]:
    """TapestryClient wired to the fake upstream."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_tapestry),
        base_url=TEST_BASE_URL
    ) as http:
        yield TapestryClient(http, TEST_API_KEY)


@pytest.fixture
def sample_wallet() -> str:
    return TEST_WALLET
