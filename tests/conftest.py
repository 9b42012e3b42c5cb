"""Global test fixtures and configuration."""

import os
import sys

import pytest
import pytest_asyncio

# Make sure the package directory is in the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set up environment variables for testing
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

from share_client.client import ShareClient
from share_client.utils.config import get_settings
from tests.helpers import TEST_PASSWORD, TEST_SERVER, TEST_USERNAME, FakeShareServer


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that patch the environment need a fresh copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_server():
    """Create a fake Share service answering with a token and three readings."""
    return FakeShareServer()


@pytest_asyncio.fixture
async def share_client(fake_server):
    """Create a ShareClient wired to the fake server."""
    http_client = fake_server.http_client()
    async with ShareClient(TEST_USERNAME, TEST_PASSWORD, TEST_SERVER, http_client=http_client) as client:
        yield client
    await http_client.aclose()
