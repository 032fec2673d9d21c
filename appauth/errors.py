from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class AppAuthError(Exception):
    """Base class for every error raised by appauth."""


class NullArgumentError(AppAuthError, TypeError):
    """A required value was None."""


class InvalidArgumentError(AppAuthError, ValueError):
    """A value was provided but is structurally wrong."""


class IllegalStateError(AppAuthError, RuntimeError):
    """Individually valid fields form an invalid combination."""


class ServiceDiscoveryError(AppAuthError, RuntimeError):
    pass


class TokenResponseError(AppAuthError, RuntimeError):
    def __init__(
        self,
        error: str,
        error_description: str | None = None,
        error_uri: str | None = None,
    ) -> None:
        message = f"Token endpoint returned error: {error}"
        if error_description:
            message = f"{message} ({error_description})"
        super().__init__(message)
        self.error = error
        self.error_description = error_description
        self.error_uri = error_uri


def check_not_none(value: T | None, message: str) -> T:
    if value is None:
        raise NullArgumentError(message)
    return value


def check_not_empty(value: str | None, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(message)
    return value


def check_null_or_not_empty(value: str | None, message: str) -> str | None:
    if value is None:
        return None
    return check_not_empty(value, message)
