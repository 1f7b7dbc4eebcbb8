"""Shared pytest configuration and fixtures for Switchboard tests."""

import os

import pytest

# Import HTTP mocking and fake provider fixtures from fixtures modules
pytest_plugins = ["tests.fixtures.mock_http", "tests.fixtures.fake_providers"]

PROVIDER_ENV_SUFFIXES = ("_API_KEY", "_BASE_URL")

SWITCHBOARD_ENV_VARS = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "CACHE_TTL_SECONDS",
    "CATALOG_STALE_POLICY",
    "CATALOG_REFRESH_INTERVAL_SECONDS",
    "SWITCHBOARD_PROVIDERS",
    "DEFAULT_PROVIDER",
    "REQUEST_TIMEOUT",
    "HEALTH_CHECK_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep a developer's real credentials and settings out of every test."""
    for key in list(os.environ):
        if key.endswith(PROVIDER_ENV_SUFFIXES) or "_CUSTOM_HEADER_" in key:
            monkeypatch.delenv(key, raising=False)
    for key in SWITCHBOARD_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def mock_openai_api_key(monkeypatch):
    """Mock OpenAI API key for testing."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")


@pytest.fixture
def mock_anthropic_api_key(monkeypatch):
    """Mock Anthropic API key for testing."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-anthropic-key")


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no network access")
    config.addinivalue_line(
        "markers", "integration: tests that exercise several components together"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath) and not item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.unit)
