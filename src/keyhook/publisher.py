"""Webhook publisher: one POST per notification document, no retries."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from keyhook.config import ListenerConfig
from keyhook.errors import PublishError
from keyhook.events.normalizer import to_json

logger = logging.getLogger(__name__)


class WebhookPublisher:
    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        *,
        api_key_header: str = "X-API-Key",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.strip()
        self.api_key = api_key
        self.api_key_header = api_key_header
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @classmethod
    def from_config(
        cls, config: ListenerConfig, *, transport: httpx.BaseTransport | None = None
    ) -> WebhookPublisher:
        return cls(
            config.base_url,
            config.api_key,
            api_key_header=config.api_key_header,
            timeout=config.timeout,
            transport=transport,
        )

    def publish(self, document: dict[str, Any] | str) -> None:
        """POST ``document`` to the base URL.

        Accepts a notification document or its already-serialized JSON.

        Raises:
            PublishError: no base URL is configured, the document or credential
                cannot be encoded, the transport failed, or the endpoint
                answered with a non-2xx status.
        """
        if not self.base_url:
            raise PublishError("webhook base URL is not configured")

        try:
            body = document if isinstance(document, str) else to_json(document)
            content = body.encode("utf-8")
        except ValueError as exc:
            raise PublishError(f"document cannot be encoded as UTF-8 JSON: {exc}") from exc

        headers = {
            "Content-Type": "application/json",
            self.api_key_header: self.api_key,
        }
        try:
            response = self._client.post(self.base_url, content=content, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise PublishError(f"webhook request to {self.base_url} failed: {exc}") from exc
        except ValueError as exc:
            # Header names and values must be ASCII.
            raise PublishError(f"webhook credential header is not sendable: {exc}") from exc

        if not response.is_success:
            raise PublishError(
                f"webhook {self.base_url} answered {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("webhook delivered", extra={"status_code": response.status_code})

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> WebhookPublisher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
