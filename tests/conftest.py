import logging

import pytest
import structlog

from keyhook.config import get_settings

_KEYHOOK_ENV = (
    "APP_ENV",
    "LOG_LEVEL",
    "KEYCLOAK_WEBHOOKS_BASE_URL",
    "KEYCLOAK_WEBHOOKS_API_KEY",
    "KEYCLOAK_WEBHOOKS_API_KEY_HEADER",
    "KEYCLOAK_WEBHOOKS_TAKEN",
    "KEYCLOAK_WEBHOOKS_TIMEOUT_SECONDS",
    "KEYCLOAK_WEBHOOKS_SHOW_GROUPS",
    "KEYCLOAK_WEBHOOKS_SHOW_ATTRIBUTES",
)


@pytest.fixture(autouse=True)
def test_env(tmp_path, monkeypatch):
    for key in _KEYHOOK_ENV:
        monkeypatch.delenv(key, raising=False)
    # Keep a developer's .env out of the settings under test.
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    root = logging.getLogger()
    level = root.level
    yield
    get_settings.cache_clear()
    # CLI commands call configure_logging(), which replaces the root handlers.
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
