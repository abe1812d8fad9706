"""Build raw events from host JSON payloads (REST exports, CLI input files)."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, TypeVar

from keyhook.events.models import (
    AuthDetails,
    EventType,
    OperationType,
    RawAdminEvent,
    RawEvent,
)

_E = TypeVar("_E", bound=Enum)


def _opt_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    return str(value)


def _opt_int(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _token(enum_cls: type[_E], value: object) -> _E | str | None:
    if value is None:
        return None
    try:
        return enum_cls(str(value))
    except ValueError:
        return str(value)


def is_admin_payload(payload: dict[str, Any]) -> bool:
    return "operationType" in payload


def parse_event(payload: dict[str, Any]) -> RawEvent:
    details_raw = payload.get("details")
    details: dict[str, str | None] | None = None
    if isinstance(details_raw, dict):
        details = {
            str(key): None if value is None else str(value) for key, value in details_raw.items()
        }
    return RawEvent(
        type=_token(EventType, payload.get("type")),
        realm_id=_opt_str(payload, "realmId"),
        client_id=_opt_str(payload, "clientId"),
        user_id=_opt_str(payload, "userId"),
        session_id=_opt_str(payload, "sessionId"),
        ip_address=_opt_str(payload, "ipAddress"),
        error=_opt_str(payload, "error"),
        details=details,
        time=_opt_int(payload, "time"),
    )


def parse_admin_event(payload: dict[str, Any]) -> RawAdminEvent:
    auth_raw = payload.get("authDetails")
    auth: AuthDetails | None = None
    if isinstance(auth_raw, dict):
        auth = AuthDetails(
            realm_id=_opt_str(auth_raw, "realmId"),
            client_id=_opt_str(auth_raw, "clientId"),
            user_id=_opt_str(auth_raw, "userId"),
            ip_address=_opt_str(auth_raw, "ipAddress"),
        )

    # Exports sometimes inline the representation as an object.
    representation = payload.get("representation")
    if representation is not None and not isinstance(representation, str):
        representation = json.dumps(representation)

    return RawAdminEvent(
        operation_type=_token(OperationType, payload.get("operationType")),
        auth_details=auth,
        resource_type=_opt_str(payload, "resourceType"),
        resource_path=_opt_str(payload, "resourcePath"),
        representation=representation,
        error=_opt_str(payload, "error"),
        time=_opt_int(payload, "time"),
    )


def parse_any(payload: dict[str, Any]) -> RawEvent | RawAdminEvent:
    if is_admin_payload(payload):
        return parse_admin_event(payload)
    return parse_event(payload)


def load_events(text: str) -> list[RawEvent | RawAdminEvent]:
    """Parse a JSON document holding one event object or a list of them."""
    data = json.loads(text)
    items = data if isinstance(data, list) else [data]
    return [parse_any(item) for item in items if isinstance(item, dict)]
