"""Root conftest — shared test configuration.

Invariants:
    - APP_VERSION and PORT never leak in from the developer's shell
    - get_settings() cache cleared around every test
"""

import pytest

from probe_api.config import get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "APP_VERSION", "PORT", "HOST", "LOG_LEVEL", "LOG_FORMAT",
        "AWS_LAMBDA_FUNCTION_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
