from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from appauth.configuration import ServiceConfiguration
from appauth.constants import (
    BUILT_IN_PARAMS,
    GRANT_TYPE_AUTHORIZATION_CODE,
    GRANT_TYPE_REFRESH_TOKEN,
    LOGGER,
    PARAM_CLIENT_ID,
    PARAM_CODE,
    PARAM_CODE_VERIFIER,
    PARAM_GRANT_TYPE,
    PARAM_REDIRECT_URI,
    PARAM_REFRESH_TOKEN,
    PARAM_SCOPE,
)
from appauth.errors import (
    IllegalStateError,
    InvalidArgumentError,
    NullArgumentError,
    check_not_empty,
    check_not_none,
    check_null_or_not_empty,
)
from appauth.scopes import scopes_to_string, string_to_scope_set, string_to_scopes
from appauth.urls import append_query_params, has_scheme


@dataclass(frozen=True)
class TokenRequest:
    """A validated request to an authorization server's token endpoint.

    Instances come from :class:`TokenRequestBuilder`; they hold no setters and
    serialize the same way every time.
    """

    configuration: ServiceConfiguration
    client_id: str
    grant_type: str
    authorization_code: str | None = None
    refresh_token: str | None = None
    redirect_uri: str | None = None
    code_verifier: str | None = None
    scope: str | None = None
    additional_parameters: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        check_not_none(self.configuration, "configuration cannot be null.")
        check_not_empty(self.client_id, "client_id cannot be null or empty.")
        if self.grant_type not in (GRANT_TYPE_AUTHORIZATION_CODE, GRANT_TYPE_REFRESH_TOKEN):
            raise InvalidArgumentError(f"Unsupported grant_type: {self.grant_type!r}")
        check_null_or_not_empty(self.authorization_code, "authorization code must not be empty.")
        check_null_or_not_empty(self.refresh_token, "refresh token must not be empty.")
        if self.authorization_code is not None and self.refresh_token is not None:
            raise IllegalStateError(
                "authorization code and refresh token are mutually exclusive."
            )
        if self.grant_type == GRANT_TYPE_AUTHORIZATION_CODE:
            if self.authorization_code is None:
                raise IllegalStateError("authorization_code grant requires an authorization code.")
            if self.redirect_uri is None:
                raise IllegalStateError(
                    "Request includes an authorization code but no redirect URI."
                )
        elif self.refresh_token is None:
            raise IllegalStateError("refresh_token grant requires a refresh token.")

        object.__setattr__(
            self,
            "additional_parameters",
            MappingProxyType(dict(self.additional_parameters)),
        )

    def scope_set(self) -> set[str] | None:
        return string_to_scope_set(self.scope)

    def to_form_params(self) -> dict[str, str]:
        params = {
            PARAM_GRANT_TYPE: self.grant_type,
            PARAM_CLIENT_ID: self.client_id,
        }
        if self.grant_type == GRANT_TYPE_AUTHORIZATION_CODE:
            params[PARAM_CODE] = self.authorization_code
            params[PARAM_REDIRECT_URI] = self.redirect_uri
        elif self.grant_type == GRANT_TYPE_REFRESH_TOKEN:
            params[PARAM_REFRESH_TOKEN] = self.refresh_token

        if self.code_verifier is not None:
            params[PARAM_CODE_VERIFIER] = self.code_verifier
        if self.scope is not None:
            params[PARAM_SCOPE] = self.scope

        params.update(self.additional_parameters)
        return params

    def to_uri(self) -> str:
        uri = append_query_params(self.configuration.token_endpoint, self.to_form_params())
        LOGGER.debug(
            "Serialized token request grant_type=%s endpoint=%s",
            self.grant_type,
            self.configuration.token_endpoint,
        )
        return uri

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "configuration": self.configuration.to_dict(),
            "client_id": self.client_id,
            "grant_type": self.grant_type,
            "authorization_code": self.authorization_code,
            "refresh_token": self.refresh_token,
            "redirect_uri": self.redirect_uri,
            "code_verifier": self.code_verifier,
            "scope": self.scope,
            "additional_parameters": dict(self.additional_parameters),
        }

    @classmethod
    def from_json_dict(cls, payload: Mapping[str, Any]) -> "TokenRequest":
        if not isinstance(payload, Mapping):
            raise InvalidArgumentError("Token request must be a JSON object.")

        builder = (
            TokenRequestBuilder(
                ServiceConfiguration.from_dict(
                    check_not_none(payload.get("configuration"), "configuration cannot be null.")
                ),
                payload.get("client_id"),
            )
            .set_authorization_code(payload.get("authorization_code"))
            .set_refresh_token(payload.get("refresh_token"))
            .set_redirect_uri(payload.get("redirect_uri"))
            .set_code_verifier(payload.get("code_verifier"))
            .set_scope(payload.get("scope"))
            .set_additional_parameters(payload.get("additional_parameters"))
        )
        request = builder.build()
        stored_grant_type = payload.get("grant_type")
        if stored_grant_type is not None and stored_grant_type != request.grant_type:
            raise InvalidArgumentError(
                f"Stored grant_type {stored_grant_type!r} does not match request fields."
            )
        return request


class TokenRequestBuilder:
    """Accumulates token request fields and validates them on the way in.

    Setters replace the previous value and return the builder, so calls can be
    chained. ``build`` checks the combination and freezes it.
    """

    def __init__(self, configuration: ServiceConfiguration, client_id: str) -> None:
        self._configuration: ServiceConfiguration
        self._client_id: str
        self._authorization_code: str | None = None
        self._refresh_token: str | None = None
        self._redirect_uri: str | None = None
        self._code_verifier: str | None = None
        self._scope: str | None = None
        self._additional_parameters: dict[str, str] = {}

        self.set_configuration(configuration)
        self.set_client_id(client_id)

    def set_configuration(self, configuration: ServiceConfiguration) -> "TokenRequestBuilder":
        self._configuration = check_not_none(configuration, "configuration cannot be null.")
        return self

    def set_client_id(self, client_id: str) -> "TokenRequestBuilder":
        self._client_id = check_not_empty(client_id, "client_id cannot be null or empty.")
        return self

    def set_authorization_code(self, code: str | None) -> "TokenRequestBuilder":
        self._authorization_code = check_null_or_not_empty(
            code, "authorization code must not be empty."
        )
        return self

    def set_refresh_token(self, token: str | None) -> "TokenRequestBuilder":
        self._refresh_token = check_null_or_not_empty(token, "refresh token must not be empty.")
        return self

    def set_redirect_uri(self, uri: str | None) -> "TokenRequestBuilder":
        if uri is not None:
            check_not_empty(uri, "redirect_uri must not be empty.")
            if not has_scheme(uri):
                raise InvalidArgumentError("redirect_uri must have a scheme.")
        self._redirect_uri = uri
        return self

    def set_code_verifier(self, verifier: str | None) -> "TokenRequestBuilder":
        self._code_verifier = verifier
        return self

    def set_scope(self, scope: str | None) -> "TokenRequestBuilder":
        if scope is None:
            self._scope = None
            return self
        if not isinstance(scope, str):
            raise InvalidArgumentError("scope must be a space-delimited string.")
        return self.set_scopes(string_to_scopes(scope))

    def set_scopes(self, scopes: Iterable[str] | None) -> "TokenRequestBuilder":
        self._scope = scopes_to_string(scopes)
        return self

    def set_additional_parameters(
        self, params: Mapping[str, str] | None
    ) -> "TokenRequestBuilder":
        if params is None:
            self._additional_parameters = {}
            return self
        if not isinstance(params, Mapping):
            raise InvalidArgumentError("Additional parameters must be a mapping of strings.")

        validated: dict[str, str] = {}
        for key, value in params.items():
            if key is None:
                raise NullArgumentError("Additional parameter names cannot be null.")
            if not isinstance(key, str) or not key:
                raise InvalidArgumentError("Additional parameter names must be non-empty strings.")
            if value is None:
                raise NullArgumentError(f"Additional parameter {key!r} has a null value.")
            if not isinstance(value, str):
                raise InvalidArgumentError(f"Additional parameter {key!r} must be a string.")
            if key in BUILT_IN_PARAMS:
                raise InvalidArgumentError(
                    f"Parameter {key} is directly supported via the builder, "
                    "use the specific setter method instead."
                )
            validated[key] = value

        self._additional_parameters = validated
        return self

    def _infer_grant_type(self) -> str:
        if self._authorization_code is not None and self._refresh_token is not None:
            raise IllegalStateError(
                "authorization code and refresh token are mutually exclusive."
            )
        if self._authorization_code is not None:
            return GRANT_TYPE_AUTHORIZATION_CODE
        if self._refresh_token is not None:
            return GRANT_TYPE_REFRESH_TOKEN
        raise IllegalStateError("grant type not specified and cannot be inferred.")

    def build(self) -> TokenRequest:
        configuration = check_not_none(self._configuration, "configuration cannot be null.")
        client_id = check_not_empty(self._client_id, "client_id cannot be null or empty.")

        grant_type = self._infer_grant_type()
        if grant_type == GRANT_TYPE_AUTHORIZATION_CODE and self._redirect_uri is None:
            raise IllegalStateError(
                "Request includes an authorization code but no redirect URI."
            )

        request = TokenRequest(
            configuration=configuration,
            client_id=client_id,
            grant_type=grant_type,
            authorization_code=self._authorization_code,
            refresh_token=self._refresh_token,
            redirect_uri=self._redirect_uri,
            code_verifier=self._code_verifier,
            scope=self._scope,
            additional_parameters=self._additional_parameters,
        )
        LOGGER.debug("Built token request grant_type=%s client_id=%s", grant_type, client_id)
        return request
