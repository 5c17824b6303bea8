"""Auth token resolution."""

from __future__ import annotations

from collections.abc import Callable

AuthTokenFunc = Callable[[], str | None]
AuthToken = str | AuthTokenFunc


def resolve_auth_token(auth_token: AuthToken | None) -> str | None:
    """Return the current token; callables are invoked on every call so tokens may rotate."""

    if isinstance(auth_token, str):
        return auth_token
    if callable(auth_token):
        return auth_token()
    return None
