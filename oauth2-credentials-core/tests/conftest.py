"""Pytest configuration and shared fixtures for oauth2-credentials-core tests."""

import pytest

from oauth2_credentials_core.testing import FakeClock


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    test_prefixes = ("TEST_", "GOOGLE_CLOUD_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def clock():
    """A FakeClock starting at 2024-01-01T00:00:00Z."""
    return FakeClock()
