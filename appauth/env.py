from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from appauth.configuration import ServiceConfiguration
from appauth.constants import LOGGER
from appauth.token_request import TokenRequestBuilder

REQUIRED_ENV = (
    "APPAUTH_AUTHORIZATION_ENDPOINT",
    "APPAUTH_TOKEN_ENDPOINT",
    "APPAUTH_CLIENT_ID",
)


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env(key: str) -> str | None:
    raw = os.getenv(key, "").strip()
    return raw or None


def load_env(path: str | Path | None = None) -> bool:
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=True)


def validate_env() -> None:
    missing = [key for key in REQUIRED_ENV if _get_env(key) is None]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("APPAUTH_DEBUG", "0"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled


def service_configuration_from_env() -> ServiceConfiguration:
    return ServiceConfiguration(
        authorization_endpoint=_get_env("APPAUTH_AUTHORIZATION_ENDPOINT"),
        token_endpoint=_get_env("APPAUTH_TOKEN_ENDPOINT"),
        registration_endpoint=_get_env("APPAUTH_REGISTRATION_ENDPOINT"),
    )


def token_request_builder_from_env() -> TokenRequestBuilder:
    """Start a token request from APPAUTH_* variables.

    The caller still supplies the grant credential (authorization code or
    refresh token) before building.
    """
    validate_env()
    builder = TokenRequestBuilder(service_configuration_from_env(), _get_env("APPAUTH_CLIENT_ID"))
    scopes = _get_env("APPAUTH_SCOPES")
    if scopes is not None:
        builder.set_scope(scopes)
    return builder
