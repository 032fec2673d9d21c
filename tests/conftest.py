import pytest

from appauth.configuration import ServiceConfiguration
from appauth.token_request import TokenRequestBuilder
from tests.values import (
    TEST_APP_REDIRECT_URI,
    TEST_AUTHORIZATION_CODE,
    TEST_CLIENT_ID,
    TEST_ISSUER,
    TEST_TOKEN_ENDPOINT,
)


@pytest.fixture
def service_config() -> ServiceConfiguration:
    return ServiceConfiguration(
        authorization_endpoint="https://test.openid.com/o/oauth/auth",
        token_endpoint=TEST_TOKEN_ENDPOINT,
        registration_endpoint="https://test.openid.com/o/oauth/register",
    )


@pytest.fixture
def discovery_doc() -> dict:
    return {
        "issuer": TEST_ISSUER,
        "authorization_endpoint": "https://test.openid.com/o/oauth/auth",
        "token_endpoint": TEST_TOKEN_ENDPOINT,
        "registration_endpoint": "https://test.openid.com/o/oauth/register",
        "end_session_endpoint": "https://test.openid.com/o/oauth/logout",
        "response_types_supported": ["code"],
        "grant_types_supported": ["authorization_code", "refresh_token"],
        "code_challenge_methods_supported": ["S256"],
    }


@pytest.fixture
def minimal_builder(service_config) -> TokenRequestBuilder:
    return TokenRequestBuilder(service_config, TEST_CLIENT_ID)


@pytest.fixture
def code_builder(service_config) -> TokenRequestBuilder:
    return (
        TokenRequestBuilder(service_config, TEST_CLIENT_ID)
        .set_authorization_code(TEST_AUTHORIZATION_CODE)
        .set_redirect_uri(TEST_APP_REDIRECT_URI)
    )
