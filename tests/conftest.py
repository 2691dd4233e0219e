"""
Pytest configuration and fixtures for api-client-core tests.
"""

import pytest
import pytest_asyncio

from api_client import ApiClient
from api_client.core.logging.config import LoggingConfig


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest_asyncio.fixture
async def client(base_url):
    """ApiClient без retry (один вызов транспорта на запрос)."""
    client = ApiClient(base_url, retries=0, retry_delay=0.001)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def retrying_client(base_url):
    """ApiClient с быстрыми retry для тестов backoff."""
    client = ApiClient(base_url, retries=3, retry_delay=0.001)
    yield client
    await client.close()


@pytest.fixture
def logging_config():
    """LoggingConfig с выводом в консоль."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
