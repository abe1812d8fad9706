"""Raw event models, normalization and diagnostic rendering."""

from keyhook.events.describe import describe
from keyhook.events.models import (
    AuthDetails,
    EventType,
    OperationType,
    RawAdminEvent,
    RawEvent,
    UserProfile,
)
from keyhook.events.normalizer import normalize_admin_event, normalize_event, to_json

__all__ = [
    "AuthDetails",
    "EventType",
    "OperationType",
    "RawAdminEvent",
    "RawEvent",
    "UserProfile",
    "describe",
    "normalize_admin_event",
    "normalize_event",
    "to_json",
]
