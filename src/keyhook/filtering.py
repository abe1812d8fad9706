"""Admission filter: decides which event types reach the webhook."""

AllowList = frozenset[str] | None


def parse_allow_list(raw: str | None) -> AllowList:
    """Split a comma-separated allow-list; ``None`` means allow all.

    Entries are taken verbatim, so ``"LOGIN, LOGOUT"`` admits ``" LOGOUT"``
    rather than ``"LOGOUT"``. Trailing empty entries (``"LOGIN,"``) are
    dropped.
    """
    if raw is None:
        return None
    entries = raw.split(",")
    while entries and not entries[-1]:
        entries.pop()
    return frozenset(entries)


def should_forward(event_type_name: str | None, allow_list: AllowList) -> bool:
    """Untyped events only pass when no allow-list is configured."""
    if allow_list is None:
        return True
    if not event_type_name:
        return False
    return event_type_name in allow_list
