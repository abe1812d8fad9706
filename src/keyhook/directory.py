"""User-directory lookup capability injected into the listener."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from keyhook.events.models import UserProfile


@runtime_checkable
class UserLookup(Protocol):
    """Resolves a user id to a profile, or ``None`` when the id is unknown."""

    def __call__(self, user_id: str) -> UserProfile | None: ...


def no_lookup(_user_id: str) -> UserProfile | None:
    return None


class InMemoryUserDirectory:
    """Static directory keyed by user id, for tests and offline replays."""

    def __init__(self, users: Iterable[UserProfile] = ()) -> None:
        self._users: dict[str, UserProfile] = {user.id: user for user in users}

    def __call__(self, user_id: str) -> UserProfile | None:
        return self._users.get(user_id)

    def __len__(self) -> int:
        return len(self._users)

    @classmethod
    def from_json(cls, text: str) -> InMemoryUserDirectory:
        data = json.loads(text)
        items = data if isinstance(data, list) else [data]
        return cls(_profile(item) for item in items if isinstance(item, dict))


def _profile(item: dict[str, Any]) -> UserProfile:
    groups = item.get("groups")
    return UserProfile(
        id=str(item.get("id", "")),
        email=item.get("email"),
        first_name=item.get("firstName"),
        last_name=item.get("lastName"),
        username=item.get("username"),
        groups=tuple(str(g) for g in groups) if isinstance(groups, list) else (),
    )
