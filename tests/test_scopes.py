import pytest

from appauth.errors import InvalidArgumentError
from appauth.scopes import scopes_to_string, string_to_scope_set, string_to_scopes


def test_scopes_to_string_none() -> None:
    assert scopes_to_string(None) is None


def test_scopes_to_string_joins_unique() -> None:
    assert scopes_to_string(["openid", "email", "email"]) == "openid email"


def test_single_string_is_one_scope() -> None:
    assert scopes_to_string("openid") == "openid"


@pytest.mark.parametrize("scopes", [[], [""], ["openid", ""], ["open id"]])
def test_scopes_to_string_rejects(scopes) -> None:
    with pytest.raises(InvalidArgumentError):
        scopes_to_string(scopes)


def test_string_to_scopes_collapses_whitespace() -> None:
    assert string_to_scopes("openid  email\tprofile") == ["openid", "email", "profile"]


def test_string_to_scope_set_none() -> None:
    assert string_to_scope_set(None) is None
