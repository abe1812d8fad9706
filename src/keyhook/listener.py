"""Event listener bridging host lifecycle and admin events to the webhook."""

from __future__ import annotations

import logging

from keyhook.config import ListenerConfig, Settings, validate_settings_for_env
from keyhook.directory import UserLookup
from keyhook.errors import KeyhookError
from keyhook.events.describe import describe_admin_event, describe_event
from keyhook.events.models import RawAdminEvent, RawEvent, token_name
from keyhook.events.normalizer import normalize_admin_event, normalize_event
from keyhook.filtering import should_forward
from keyhook.logging import bind_event_context, clear_event_context
from keyhook.publisher import WebhookPublisher

logger = logging.getLogger("keyhook.events")

PROVIDER_ID = "webhook_event_listener"


class WebhookEventListener:
    """Per-session listener; holds no mutable state after construction.

    Every failure past the admission check is logged and dropped so the host's
    event dispatch never sees an exception from this listener.
    """

    def __init__(
        self,
        publisher: WebhookPublisher,
        config: ListenerConfig,
        lookup_user: UserLookup,
    ) -> None:
        self.publisher = publisher
        self.config = config
        self.lookup_user = lookup_user

    def on_event(self, event: RawEvent) -> bool:
        self._log_description("Event Occurred", event)
        type_name = token_name(event.type)
        if not should_forward(type_name, self.config.allow_list):
            logger.debug("event %s not in allow-list, skipping", type_name)
            return False

        bind_event_context(event_type=type_name, realm_id=event.realm_id)
        try:
            document = normalize_event(
                event,
                self.lookup_user,
                show_groups=self.config.show_groups,
                show_attributes=self.config.show_attributes,
            )
            self.publisher.publish(document)
            return True
        except KeyhookError as exc:
            logger.error("dropping event %s: %s", type_name, exc)
        except Exception:
            # The directory lookup is host code; its failures stay here too.
            logger.exception("dropping event %s: unexpected failure", type_name)
        finally:
            clear_event_context()
        return False

    def on_admin_event(self, event: RawAdminEvent, include_representation: bool = False) -> bool:
        # The host decides include_representation; whatever it attaches is forwarded.
        self._log_description("Admin Event Occurred", event)
        type_name = token_name(event.operation_type)
        if not should_forward(type_name, self.config.allow_list):
            logger.debug("admin operation %s not in allow-list, skipping", type_name)
            return False

        realm_id = event.auth_details.realm_id if event.auth_details else None
        bind_event_context(event_type=type_name, realm_id=realm_id)
        try:
            self.publisher.publish(normalize_admin_event(event))
            return True
        except KeyhookError as exc:
            logger.error("dropping admin event %s: %s", type_name, exc)
        except Exception:
            logger.exception("dropping admin event %s: unexpected failure", type_name)
        finally:
            clear_event_context()
        return False

    def close(self) -> None:
        self.publisher.close()

    def _log_description(self, prefix: str, event: RawEvent | RawAdminEvent) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        try:
            if isinstance(event, RawAdminEvent):
                line = describe_admin_event(event)
            else:
                line = describe_event(event)
        except Exception:
            logger.warning("%s: could not render event", prefix, exc_info=True)
            return
        logger.info("%s:%s", prefix, line)


class WebhookEventListenerFactory:
    """Reads configuration once at startup and hands out listeners per session."""

    provider_id = PROVIDER_ID

    def __init__(self) -> None:
        self.config: ListenerConfig | None = None

    def init(self, settings: Settings) -> None:
        validate_settings_for_env(settings)
        self.config = ListenerConfig.from_settings(settings)
        logger.info(
            "webhook listener configured",
            extra={
                "base_url": self.config.base_url,
                "allow_list": sorted(self.config.allow_list)
                if self.config.allow_list is not None
                else None,
            },
        )

    def create(
        self, lookup_user: UserLookup, *, publisher: WebhookPublisher | None = None
    ) -> WebhookEventListener:
        if self.config is None:
            raise KeyhookError("listener factory used before init()")
        return WebhookEventListener(
            publisher or WebhookPublisher.from_config(self.config),
            self.config,
            lookup_user,
        )

    def close(self) -> None:
        """Nothing to release; listeners own their publishers."""
