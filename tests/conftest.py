"""Shared fixtures for candlestore tests."""

import pytest

from candlestore import config


@pytest.fixture(autouse=True, scope="session")
def isolated_config(tmp_path_factory):
    """Keep tests from reading the user's config file."""
    original = config.CONFIG_PATH
    config.CONFIG_PATH = tmp_path_factory.mktemp("config") / "config.toml"
    config.get_settings.cache_clear()
    yield
    config.CONFIG_PATH = original
    config.get_settings.cache_clear()
