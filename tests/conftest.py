# Shared fixtures for the Dribbble client tests.
# Created: 2026-10-19

import pytest

from dribbble_oauth.config import Settings, get_settings
from dribbble_oauth.oauth import OAuthManager
from dribbble_oauth.token_store import MemoryKeyValueStore, TokenStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and environment."""
    for var in ("DRIBBBLE_CLIENT_ID", "DRIBBBLE_CLIENT_SECRET", "DRIBBBLE_CONFIG_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DRIBBBLE_CONFIG_DIR", str(tmp_path / "config"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, config_dir=tmp_path / "config")


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def token_store(kv):
    return TokenStore(kv)


@pytest.fixture
def opened_urls():
    return []


@pytest.fixture
def manager(token_store, settings, opened_urls):
    return OAuthManager(token_store, settings=settings, opener=opened_urls.append)
