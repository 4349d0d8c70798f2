"""
Pytest configuration and fixtures
"""
import os

import pytest

from modules.number_convert.core.config import ENV_PREFIX, get_settings

# Never pick up a developer's .env while testing
os.environ.setdefault("SKIP_DOTENV", "1")


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Clear cached settings and prefix toggles from the environment"""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
