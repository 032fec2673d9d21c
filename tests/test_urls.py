import urllib.parse

from appauth.urls import append_query_params, has_scheme, join_url_path


def test_append_query_params_preserves_existing() -> None:
    url = append_query_params("https://idp.example.com/token?tenant=acme", {"a": "1 2"})

    query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)

    assert query == {"tenant": ["acme"], "a": ["1 2"]}


def test_append_query_params_overrides_same_key() -> None:
    url = append_query_params("https://idp.example.com/token?a=old", {"a": "new"})

    assert urllib.parse.parse_qs(urllib.parse.urlparse(url).query) == {"a": ["new"]}


def test_has_scheme() -> None:
    assert has_scheme("com.example.app:/oauth2redirect") is True
    assert has_scheme("https://app.example.com/callback") is True
    assert has_scheme("/callback") is False


def test_join_url_path() -> None:
    assert (
        join_url_path("https://idp.example.com/realms/demo/", "/.well-known/openid-configuration")
        == "https://idp.example.com/realms/demo/.well-known/openid-configuration"
    )
    assert (
        join_url_path("https://idp.example.com", "/.well-known/openid-configuration")
        == "https://idp.example.com/.well-known/openid-configuration"
    )


def test_append_query_params_keeps_existing_order_and_replaces_repeats() -> None:
    url = append_query_params("https://idp.example.com/token?b=1&a=old&c=2&a=older", {"a": "new"})

    assert urllib.parse.urlsplit(url).query == "b=1&c=2&a=new"
