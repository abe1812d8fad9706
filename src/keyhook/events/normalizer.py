"""Event normalization into the webhook notification document.

Both entry points build a plain ``dict`` in emission order; the order has no
meaning to JSON consumers but keeps serialized output reproducible.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from keyhook.errors import MalformedRepresentationError
from keyhook.events.models import RawAdminEvent, RawEvent, UserProfile, token_name

ADMIN_EVENT_TYPE = "ADMIN_EVENT"

UserLookupFn = Callable[[str], UserProfile | None]
NotificationDocument = dict[str, Any]


def _put(doc: NotificationDocument, key: str, value: object) -> None:
    if value is not None:
        doc[key] = str(value)


def user_groups(user: UserProfile) -> list[str]:
    return list(user.groups)


def user_attributes(user: UserProfile) -> dict[str, str]:
    attrs = {"userId": user.id}
    for key, value in (
        ("email", user.email),
        ("firstName", user.first_name),
        ("lastName", user.last_name),
        ("username", user.username),
    ):
        if value:
            attrs[key] = value
    return attrs


def normalize_event(
    event: RawEvent,
    lookup_user: UserLookupFn,
    *,
    show_groups: bool = True,
    show_attributes: bool = True,
) -> NotificationDocument:
    """Map a lifecycle event to its notification document.

    When the event names a user and ``lookup_user`` resolves it, the document
    carries ``userGroups`` and ``userAttributes``. A lookup miss skips
    enrichment without raising.
    """
    doc: NotificationDocument = {}
    _put(doc, "type", token_name(event.type))
    _put(doc, "realmId", event.realm_id)
    _put(doc, "clientId", event.client_id)

    if event.user_id is not None:
        user = lookup_user(str(event.user_id))
        if user is not None:
            if show_groups:
                doc["userGroups"] = user_groups(user)
            if show_attributes:
                doc["userAttributes"] = user_attributes(user)

    _put(doc, "ipAddress", event.ip_address)
    _put(doc, "error", event.error)

    if event.details is not None:
        for key, value in event.details.items():
            # Null detail values go out as the string "null"; consumers rely on it.
            doc[key] = "null" if value is None else str(value)
    return doc


def _reject_constant(name: str) -> Any:
    raise MalformedRepresentationError(f"representation is not valid JSON: {name} is not allowed")


def parse_representation(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise MalformedRepresentationError(f"representation is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise MalformedRepresentationError(
            f"representation must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed


def normalize_admin_event(event: RawAdminEvent) -> NotificationDocument:
    """Map an admin event to its notification document.

    Raises:
        MalformedRepresentationError: the representation is present but is not
            a JSON object.
    """
    doc: NotificationDocument = {"type": ADMIN_EVENT_TYPE}
    _put(doc, "operationType", token_name(event.operation_type))

    auth = event.auth_details
    if auth is not None:
        _put(doc, "realmId", auth.realm_id)
        _put(doc, "clientId", auth.client_id)
        # Only embedded alongside auth details, matching the host listener.
        if event.representation is not None:
            doc["representation"] = parse_representation(event.representation)
        _put(doc, "ipAddress", auth.ip_address)

    _put(doc, "resourceType", event.resource_type)
    _put(doc, "resourcePath", event.resource_path)
    _put(doc, "error", event.error)
    return doc


def to_json(document: NotificationDocument) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
