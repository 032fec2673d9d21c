import urllib.parse

from appauth.http import FORM_CONTENT_TYPE, build_token_http_request
from tests.values import TEST_AUTHORIZATION_CODE, TEST_CODE_VERIFIER, TEST_TOKEN_ENDPOINT


def test_build_token_http_request(code_builder) -> None:
    request = code_builder.set_code_verifier(TEST_CODE_VERIFIER).build()

    http_request = build_token_http_request(request)
    body = urllib.parse.parse_qs(http_request.content.decode())

    assert http_request.method == "POST"
    assert str(http_request.url) == TEST_TOKEN_ENDPOINT
    assert http_request.headers["accept"] == "application/json"
    assert http_request.headers["content-type"] == FORM_CONTENT_TYPE
    assert body["grant_type"] == ["authorization_code"]
    assert body["code"] == [TEST_AUTHORIZATION_CODE]
    assert body["code_verifier"] == [TEST_CODE_VERIFIER]


def test_body_matches_form_params(code_builder) -> None:
    request = code_builder.set_scope("openid email").build()

    http_request = build_token_http_request(request)
    body = urllib.parse.parse_qs(http_request.content.decode())

    assert {key: values[0] for key, values in body.items()} == request.to_form_params()
