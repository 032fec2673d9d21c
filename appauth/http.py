from __future__ import annotations

import httpx

from appauth.constants import APP_VERSION, LOGGER
from appauth.token_request import TokenRequest

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_token_http_request(request: TokenRequest) -> httpx.Request:
    """Render ``request`` as an unsent POST for the caller's HTTP client."""
    http_request = httpx.Request(
        method="POST",
        url=request.configuration.token_endpoint,
        headers={
            "Accept": "application/json",
            "Content-Type": FORM_CONTENT_TYPE,
            "User-Agent": f"appauth-python/{APP_VERSION}",
        },
        data=request.to_form_params(),
    )
    LOGGER.debug(
        "Prepared token HTTP request %s %s grant_type=%s",
        http_request.method,
        http_request.url,
        request.grant_type,
    )
    return http_request
