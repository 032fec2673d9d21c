from __future__ import annotations

from collections.abc import Iterable

from appauth.errors import InvalidArgumentError


def scopes_to_string(scopes: Iterable[str] | None) -> str | None:
    """Join scope tokens with single spaces, dropping repeats.

    Returns None for a None input. Raises InvalidArgumentError when a token
    is empty or contains whitespace, or when the result would be empty.
    """
    if scopes is None:
        return None
    if isinstance(scopes, str):
        scopes = [scopes]
    elif not isinstance(scopes, Iterable):
        raise InvalidArgumentError("Scopes must be a string or an iterable of strings.")

    unique: dict[str, None] = {}
    for scope in scopes:
        if not isinstance(scope, str) or not scope:
            raise InvalidArgumentError("Individual scopes cannot be null or empty.")
        if any(char.isspace() for char in scope):
            raise InvalidArgumentError(f"Scope {scope!r} must not contain whitespace.")
        unique[scope] = None

    if not unique:
        raise InvalidArgumentError("Scope collection must not be empty.")
    return " ".join(unique)


def string_to_scopes(scope: str | None) -> list[str] | None:
    if scope is None:
        return None
    return scope.split()


def string_to_scope_set(scope: str | None) -> set[str] | None:
    scopes = string_to_scopes(scope)
    if scopes is None:
        return None
    return set(scopes)
