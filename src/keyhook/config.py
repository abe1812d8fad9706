"""Listener configuration contract."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from keyhook.errors import ConfigError
from keyhook.filtering import AllowList, parse_allow_list


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")

    webhooks_base_url: str = Field(alias="KEYCLOAK_WEBHOOKS_BASE_URL", default="")
    webhooks_api_key: str = Field(alias="KEYCLOAK_WEBHOOKS_API_KEY", default="")
    webhooks_api_key_header: str = Field(
        alias="KEYCLOAK_WEBHOOKS_API_KEY_HEADER", default="X-API-Key"
    )
    # Comma-separated event type names; unset forwards everything.
    webhooks_taken: str | None = Field(alias="KEYCLOAK_WEBHOOKS_TAKEN", default=None)
    webhooks_timeout_seconds: float = Field(
        alias="KEYCLOAK_WEBHOOKS_TIMEOUT_SECONDS", default=10.0
    )
    webhooks_show_groups: int = Field(alias="KEYCLOAK_WEBHOOKS_SHOW_GROUPS", default=1)
    webhooks_show_attributes: int = Field(alias="KEYCLOAK_WEBHOOKS_SHOW_ATTRIBUTES", default=1)


@dataclass(frozen=True, slots=True)
class ListenerConfig:
    """Process-wide listener settings, fixed at startup and shared read-only."""

    base_url: str
    api_key: str = ""
    api_key_header: str = "X-API-Key"
    timeout: float = 10.0
    allow_list: AllowList = None
    show_groups: bool = True
    show_attributes: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> ListenerConfig:
        return cls(
            base_url=settings.webhooks_base_url.strip(),
            api_key=settings.webhooks_api_key,
            api_key_header=settings.webhooks_api_key_header,
            timeout=settings.webhooks_timeout_seconds,
            allow_list=parse_allow_list(settings.webhooks_taken),
            show_groups=int(settings.webhooks_show_groups) == 1,
            show_attributes=int(settings.webhooks_show_attributes) == 1,
        )


def validate_settings_for_env(settings: Settings) -> None:
    import logging as _logging

    _logger = _logging.getLogger(__name__)

    base_url = settings.webhooks_base_url.strip()
    if not base_url:
        _logger.warning("KEYCLOAK_WEBHOOKS_BASE_URL is not set; every publish will fail")
    if not settings.webhooks_api_key:
        _logger.warning("KEYCLOAK_WEBHOOKS_API_KEY is not set; sending an empty credential")

    if settings.app_env != "prod":
        return

    missing: list[str] = []
    if not base_url:
        missing.append("KEYCLOAK_WEBHOOKS_BASE_URL")
    elif urlparse(base_url).scheme not in {"http", "https"}:
        missing.append("KEYCLOAK_WEBHOOKS_BASE_URL(http or https URL required)")
    if settings.webhooks_timeout_seconds <= 0:
        missing.append("KEYCLOAK_WEBHOOKS_TIMEOUT_SECONDS(positive value required)")

    if missing:
        keys = ", ".join(sorted(set(missing)))
        raise ConfigError(f"invalid production configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
