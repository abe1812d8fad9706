"""Raw event shapes delivered by the identity host, plus user profiles."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class EventType(str, Enum):
    LOGIN = "LOGIN"
    LOGIN_ERROR = "LOGIN_ERROR"
    LOGOUT = "LOGOUT"
    LOGOUT_ERROR = "LOGOUT_ERROR"
    REGISTER = "REGISTER"
    REGISTER_ERROR = "REGISTER_ERROR"
    CODE_TO_TOKEN = "CODE_TO_TOKEN"
    CODE_TO_TOKEN_ERROR = "CODE_TO_TOKEN_ERROR"
    REFRESH_TOKEN = "REFRESH_TOKEN"
    REFRESH_TOKEN_ERROR = "REFRESH_TOKEN_ERROR"
    CLIENT_LOGIN = "CLIENT_LOGIN"
    CLIENT_LOGIN_ERROR = "CLIENT_LOGIN_ERROR"
    UPDATE_PROFILE = "UPDATE_PROFILE"
    UPDATE_PROFILE_ERROR = "UPDATE_PROFILE_ERROR"
    UPDATE_PASSWORD = "UPDATE_PASSWORD"
    UPDATE_PASSWORD_ERROR = "UPDATE_PASSWORD_ERROR"
    UPDATE_EMAIL = "UPDATE_EMAIL"
    VERIFY_EMAIL = "VERIFY_EMAIL"
    VERIFY_EMAIL_ERROR = "VERIFY_EMAIL_ERROR"
    SEND_RESET_PASSWORD = "SEND_RESET_PASSWORD"
    RESET_PASSWORD = "RESET_PASSWORD"
    RESET_PASSWORD_ERROR = "RESET_PASSWORD_ERROR"
    REMOVE_TOTP = "REMOVE_TOTP"
    UPDATE_TOTP = "UPDATE_TOTP"
    IDENTITY_PROVIDER_LOGIN = "IDENTITY_PROVIDER_LOGIN"
    IDENTITY_PROVIDER_LOGIN_ERROR = "IDENTITY_PROVIDER_LOGIN_ERROR"
    IDENTITY_PROVIDER_FIRST_LOGIN = "IDENTITY_PROVIDER_FIRST_LOGIN"
    IDENTITY_PROVIDER_LINK_ACCOUNT = "IDENTITY_PROVIDER_LINK_ACCOUNT"
    IMPERSONATE = "IMPERSONATE"
    DELETE_ACCOUNT = "DELETE_ACCOUNT"
    DELETE_ACCOUNT_ERROR = "DELETE_ACCOUNT_ERROR"
    INTROSPECT_TOKEN = "INTROSPECT_TOKEN"
    PERMISSION_TOKEN = "PERMISSION_TOKEN"
    CUSTOM_REQUIRED_ACTION = "CUSTOM_REQUIRED_ACTION"


class OperationType(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ACTION = "ACTION"


@dataclass(frozen=True, slots=True)
class RawEvent:
    type: EventType | str | None = None
    realm_id: str | None = None
    client_id: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    ip_address: str | None = None
    error: str | None = None
    details: Mapping[str, str | None] | None = None
    time: int | None = None


@dataclass(frozen=True, slots=True)
class AuthDetails:
    realm_id: str | None = None
    client_id: str | None = None
    user_id: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True, slots=True)
class RawAdminEvent:
    operation_type: OperationType | str | None = None
    auth_details: AuthDetails | None = None
    resource_type: str | None = None
    resource_path: str | None = None
    representation: str | None = None
    error: str | None = None
    time: int | None = None


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Directory view of a user; a lookup miss is ``None``, never an empty profile."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    groups: tuple[str, ...] = field(default_factory=tuple)


def token_name(value: Enum | str | None) -> str | None:
    """Wire name of an enum token; plain strings pass through for host types we do not model."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
