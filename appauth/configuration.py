from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from appauth.constants import LOGGER, OPENID_CONFIGURATION_PATH
from appauth.errors import (
    InvalidArgumentError,
    NullArgumentError,
    ServiceDiscoveryError,
)
from appauth.urls import join_url_path

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _validate_endpoint(name: str, value: str | None, *, required: bool) -> None:
    if value is None:
        if required:
            raise NullArgumentError(f"{name} cannot be null.")
        return
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string URL.")
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as error:
        raise InvalidArgumentError(f"{name} is not a valid http(s) URL: {value!r}") from error


@dataclass(frozen=True)
class ServiceConfiguration:
    """Endpoints of an OAuth2 authorization server.

    Either constructed directly from known endpoint URLs or derived from an
    OpenID Provider discovery document.
    """

    authorization_endpoint: str
    token_endpoint: str
    registration_endpoint: str | None = None
    end_session_endpoint: str | None = None
    discovery_doc: Mapping[str, Any] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        _validate_endpoint("authorization_endpoint", self.authorization_endpoint, required=True)
        _validate_endpoint("token_endpoint", self.token_endpoint, required=True)
        _validate_endpoint("registration_endpoint", self.registration_endpoint, required=False)
        _validate_endpoint("end_session_endpoint", self.end_session_endpoint, required=False)

    @classmethod
    def from_discovery_document(cls, doc: Mapping[str, Any]) -> "ServiceConfiguration":
        if not isinstance(doc, Mapping):
            raise InvalidArgumentError("Discovery document must be a JSON object.")

        for key in ("authorization_endpoint", "token_endpoint"):
            value = doc.get(key)
            if not isinstance(value, str) or not value:
                raise InvalidArgumentError(f"Discovery document missing {key}.")

        return cls(
            authorization_endpoint=doc["authorization_endpoint"],
            token_endpoint=doc["token_endpoint"],
            registration_endpoint=doc.get("registration_endpoint"),
            end_session_endpoint=doc.get("end_session_endpoint"),
            discovery_doc=dict(doc),
        )

    @classmethod
    async def fetch_from_issuer(
        cls,
        issuer: str,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "ServiceConfiguration":
        _validate_endpoint("issuer", issuer, required=True)
        url = join_url_path(issuer, OPENID_CONFIGURATION_PATH)

        own_client = client is None
        http_client = client or httpx.AsyncClient()

        LOGGER.info("Fetching discovery document from %s", url)
        try:
            response = await http_client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as error:
            raise ServiceDiscoveryError(
                f"Discovery request failed with status {error.response.status_code}: "
                f"{error.response.text}"
            ) from error
        except httpx.HTTPError as error:
            raise ServiceDiscoveryError(f"Discovery request to {url} failed: {error}") from error
        except ValueError as error:
            raise ServiceDiscoveryError("Discovery response is not valid JSON.") from error
        finally:
            if own_client:
                await http_client.aclose()

        if not isinstance(payload, dict):
            raise ServiceDiscoveryError("Discovery document must be a JSON object.")

        advertised = payload.get("issuer")
        if isinstance(advertised, str) and advertised.rstrip("/") != issuer.rstrip("/"):
            LOGGER.warning(
                "Discovery issuer mismatch requested=%s advertised=%s",
                issuer,
                advertised,
            )

        try:
            return cls.from_discovery_document(payload)
        except InvalidArgumentError as error:
            raise ServiceDiscoveryError(str(error)) from error

    def to_dict(self) -> dict[str, Any]:
        if self.discovery_doc is not None:
            return {"discoveryDoc": dict(self.discovery_doc)}

        payload: dict[str, Any] = {
            "authorizationEndpoint": self.authorization_endpoint,
            "tokenEndpoint": self.token_endpoint,
        }
        if self.registration_endpoint is not None:
            payload["registrationEndpoint"] = self.registration_endpoint
        if self.end_session_endpoint is not None:
            payload["endSessionEndpoint"] = self.end_session_endpoint
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ServiceConfiguration":
        if not isinstance(payload, Mapping):
            raise InvalidArgumentError("Service configuration must be a JSON object.")
        if "discoveryDoc" in payload:
            return cls.from_discovery_document(payload["discoveryDoc"])
        return cls(
            authorization_endpoint=payload.get("authorizationEndpoint"),
            token_endpoint=payload.get("tokenEndpoint"),
            registration_endpoint=payload.get("registrationEndpoint"),
            end_session_endpoint=payload.get("endSessionEndpoint"),
        )
