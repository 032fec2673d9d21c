from __future__ import annotations

import logging

LOGGER = logging.getLogger("appauth")
APP_VERSION = "0.1.0"

PARAM_GRANT_TYPE = "grant_type"
PARAM_CLIENT_ID = "client_id"
PARAM_CODE = "code"
PARAM_REDIRECT_URI = "redirect_uri"
PARAM_REFRESH_TOKEN = "refresh_token"
PARAM_SCOPE = "scope"
PARAM_CODE_VERIFIER = "code_verifier"

GRANT_TYPE_AUTHORIZATION_CODE = "authorization_code"
GRANT_TYPE_REFRESH_TOKEN = "refresh_token"

# Keys callers may not override through additional parameters.
BUILT_IN_PARAMS = frozenset(
    {
        PARAM_GRANT_TYPE,
        PARAM_CLIENT_ID,
        PARAM_CODE,
        PARAM_REDIRECT_URI,
        PARAM_REFRESH_TOKEN,
        PARAM_SCOPE,
        PARAM_CODE_VERIFIER,
    }
)

OPENID_CONFIGURATION_PATH = "/.well-known/openid-configuration"
