"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from identifier import EPOCH_MS, reset_sources
from web.app import create_app


@pytest.fixture(autouse=True)
def default_sources():
    """Restore the real clock and random source after every test."""
    yield
    reset_sources()


@pytest.fixture
def fixed_now():
    """A fixed instant a little over 16 minutes after the epoch."""
    return EPOCH_MS + 1_000_000


@pytest.fixture
def config():
    """Default config, independent of config.json."""
    return Config()


@pytest.fixture
async def app(config):
    """Create test FastAPI app."""
    return create_app(config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
