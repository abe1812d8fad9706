from keyhook.filtering import parse_allow_list, should_forward


def test_absent_allow_list_forwards_everything() -> None:
    for name in ("LOGIN", "REGISTER", "DELETE", ""):
        assert should_forward(name, None) is True


def test_allow_list_membership() -> None:
    allow = frozenset({"LOGIN", "LOGOUT"})
    assert should_forward("LOGIN", allow) is True
    assert should_forward("LOGOUT", allow) is True
    assert should_forward("REGISTER", allow) is False


def test_allow_list_is_case_sensitive() -> None:
    assert should_forward("login", frozenset({"LOGIN"})) is False


def test_parse_allow_list_unset_means_all() -> None:
    assert parse_allow_list(None) is None


def test_parse_allow_list_splits_on_commas_verbatim() -> None:
    assert parse_allow_list("LOGIN,LOGOUT") == frozenset({"LOGIN", "LOGOUT"})
    assert parse_allow_list("LOGIN, LOGOUT") == frozenset({"LOGIN", " LOGOUT"})


def test_parse_allow_list_empty_string_admits_nothing() -> None:
    allow = parse_allow_list("")
    assert allow == frozenset()
    assert should_forward("LOGIN", allow) is False
    assert should_forward("", allow) is False


def test_parse_allow_list_drops_trailing_empty_entries() -> None:
    assert parse_allow_list("LOGIN,") == frozenset({"LOGIN"})
    assert parse_allow_list("LOGIN,,") == frozenset({"LOGIN"})
    # Inner empty entries are kept, as String.split keeps them.
    assert parse_allow_list("LOGIN,,LOGOUT") == frozenset({"LOGIN", "", "LOGOUT"})


def test_untyped_event_needs_open_allow_list() -> None:
    assert should_forward(None, None) is True
    assert should_forward(None, frozenset({"LOGIN"})) is False
    assert should_forward("", frozenset({"LOGIN", ""})) is False
