from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import httpx

from appauth.constants import LOGGER
from appauth.errors import InvalidArgumentError, TokenResponseError
from appauth.scopes import string_to_scope_set
from appauth.token_request import TokenRequest

KNOWN_TOKEN_TYPES = frozenset({"bearer", "dpop", "mac"})

_BUILT_IN_FIELDS = frozenset(
    {
        "token_type",
        "access_token",
        "expires_in",
        "id_token",
        "refresh_token",
        "scope",
    }
)


@dataclass(frozen=True)
class TokenResponse:
    request: TokenRequest
    token_type: str
    access_token: str
    access_token_expiration_time: float | None = None
    id_token: str | None = None
    refresh_token: str | None = None
    scope: str | None = None
    additional_parameters: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "additional_parameters",
            MappingProxyType(dict(self.additional_parameters)),
        )

    def is_expired(self, now: float | None = None) -> bool:
        if self.access_token_expiration_time is None:
            return False
        current = time.time() if now is None else now
        return current >= self.access_token_expiration_time

    def scope_set(self) -> set[str] | None:
        return string_to_scope_set(self.scope)

    @classmethod
    def from_payload(
        cls,
        request: TokenRequest,
        payload: Mapping[str, Any],
        *,
        now: float | None = None,
    ) -> "TokenResponse":
        if not isinstance(payload, Mapping):
            raise InvalidArgumentError("Token response must be a JSON object.")

        error = payload.get("error")
        if error is not None:
            raise TokenResponseError(
                str(error),
                payload.get("error_description"),
                payload.get("error_uri"),
            )

        access_token = payload.get("access_token")
        token_type = payload.get("token_type")
        expires_in = payload.get("expires_in")
        id_token = payload.get("id_token")
        refresh_token = payload.get("refresh_token")
        scope = payload.get("scope", request.scope)

        if not isinstance(access_token, str) or not access_token:
            raise InvalidArgumentError("Token response missing access_token.")
        if not isinstance(token_type, str) or not token_type:
            raise InvalidArgumentError("Token response missing token_type.")
        if expires_in is not None and (
            isinstance(expires_in, bool) or not isinstance(expires_in, int)
        ):
            raise InvalidArgumentError("Token response expires_in must be an integer.")
        if id_token is not None and not isinstance(id_token, str):
            raise InvalidArgumentError("Token response id_token must be a string.")
        if refresh_token is not None and not isinstance(refresh_token, str):
            raise InvalidArgumentError("Token response refresh_token must be a string.")
        if scope is not None and not isinstance(scope, str):
            raise InvalidArgumentError("Token response scope must be a string.")

        if token_type.lower() not in KNOWN_TOKEN_TYPES:
            LOGGER.warning("Token response has unrecognized token_type=%s", token_type)

        expiration_time = None
        if expires_in is not None:
            current = time.time() if now is None else now
            expiration_time = current + expires_in

        return cls(
            request=request,
            token_type=token_type,
            access_token=access_token,
            access_token_expiration_time=expiration_time,
            id_token=id_token,
            refresh_token=refresh_token,
            scope=scope,
            additional_parameters={
                key: value for key, value in payload.items() if key not in _BUILT_IN_FIELDS
            },
        )

    @classmethod
    def from_httpx_response(
        cls,
        request: TokenRequest,
        response: httpx.Response,
    ) -> "TokenResponse":
        """Parse a response the caller's transport received from the token endpoint.

        OAuth2 error bodies (``{"error": ...}``) arrive with a 400 or 401 status
        and are raised as :class:`TokenResponseError`.
        """
        try:
            payload = response.json()
        except ValueError as error:
            raise TokenResponseError(
                "invalid_response",
                f"Token endpoint returned non-JSON body with status {response.status_code}.",
            ) from error

        if response.status_code >= 400 and not (
            isinstance(payload, Mapping) and "error" in payload
        ):
            raise TokenResponseError(
                "invalid_response",
                f"Token endpoint returned status {response.status_code}.",
            )
        return cls.from_payload(request, payload)
