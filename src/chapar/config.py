"""Configuration helpers for the Chapar client."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

BaseUrlSpec = str | Mapping[str, str]

DEFAULT_AUTHORIZATION_KEY = "Authorization"
DEFAULT_SUCCESS_STATUS_CODES: tuple[int, ...] = (200, 201)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Typed configuration for `ChaparClient`."""

    base_url: BaseUrlSpec | None = None
    authorization_key: str = DEFAULT_AUTHORIZATION_KEY
    success_key: str = "success"
    message_key: str = "message"
    data_key: str = "data"
    timeout: float = 5.0
    throw_error: bool = False
    success_status_codes: tuple[int, ...] = DEFAULT_SUCCESS_STATUS_CODES
    verify_ssl: bool | str = True
    default_headers: Mapping[str, str] | None = None

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.default_headers:
            headers.update(self.default_headers)
        return headers


@dataclass(slots=True)
class UrlSpec:
    """Structured request target: a path plus optional segments and query."""

    path: str
    query_params: Mapping[str, Any] | None = None
    path_segments: tuple[Any, ...] | list[Any] = ()


@dataclass(slots=True)
class RequestSpec:
    """Bundle together per-call request options."""

    method: str = "get"
    body: Any | None = None
    headers: MutableMapping[str, str] = field(default_factory=dict)
    attach_auth_token: bool = False
    base_url_key: str | None = None
    throw_error: bool | None = None
    dto: Callable[[Any, Any], Any] | None = None
