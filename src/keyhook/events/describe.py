"""Single-line diagnostic rendering of raw events for the log sink."""

from __future__ import annotations

from keyhook.events.models import AuthDetails, RawAdminEvent, RawEvent, token_name


def _quote(value: str | None) -> str:
    if value is not None and " " in value:
        return f"'{value}'"
    return str(value)


def describe_event(event: RawEvent) -> str:
    parts = [
        f"type={token_name(event.type)}",
        f"realmId={event.realm_id}",
        f"clientId={event.client_id}",
        f"userId={event.user_id}",
        f"ipAddress={event.ip_address}",
    ]
    if event.error is not None:
        parts.append(f"error={event.error}")
    if event.details is not None:
        parts.extend(f"{key}={_quote(value)}" for key, value in event.details.items())
    return ", ".join(parts)


def describe_admin_event(event: RawAdminEvent) -> str:
    auth = event.auth_details or AuthDetails()
    parts = [
        f"operationType={token_name(event.operation_type)}",
        f"realmId={auth.realm_id}",
        f"clientId={auth.client_id}",
        f"userId={auth.user_id}",
        f"ipAddress={auth.ip_address}",
        f"resourcePath={event.resource_path}",
    ]
    if event.error is not None:
        parts.append(f"error={event.error}")
    return ", ".join(parts)


def describe(event: RawEvent | RawAdminEvent) -> str:
    if isinstance(event, RawAdminEvent):
        return describe_admin_event(event)
    return describe_event(event)
