"""
Shared fixtures for the Remitano SDK test suite
"""

from datetime import datetime, timezone

import pytest

from remitano_sdk.config import create_config


@pytest.fixture
def client_config():
    """Configuration with the key/secret pair used by the reference vectors."""
    return create_config(key="key", secret="secret", api_url="https://api.example.com")


@pytest.fixture
def fixed_date():
    """A fixed request time so signatures are reproducible."""
    return datetime(1994, 11, 15, 8, 12, 31, tzinfo=timezone.utc)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every REMITANO_* variable from the environment."""
    for name in ("REMITANO_API_KEY", "REMITANO_API_SECRET", "REMITANO_API_URL", "REMITANO_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
