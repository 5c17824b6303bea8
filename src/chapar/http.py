"""HTTP utilities backing the Chapar dispatcher."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any

import requests
from requests import PreparedRequest, Response, Session

from .exceptions import TransportError

REDACTED = "<redacted>"


@dataclass(slots=True)
class HttpResponse:
    """Typed response wrapper with helper accessors."""

    status_code: int
    data: Any
    headers: Mapping[str, str]


def decode_body(response: Response) -> Any:
    """Decode JSON bodies, falling back to raw text for anything else."""

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def redact_headers(
    headers: Mapping[str, str] | None, sensitive: Collection[str] = ()
) -> dict[str, str]:
    """Copy headers, masking the values of `sensitive` names (case-insensitive)."""

    masked = {name.lower() for name in sensitive}
    return {
        name: REDACTED if name.lower() in masked else value
        for name, value in (headers or {}).items()
    }


def describe_request(
    prepared: PreparedRequest | None,
    *,
    method: str | None = None,
    url: str | None = None,
    headers: Mapping[str, str] | None = None,
    timeout: float | None = None,
    sensitive_headers: Collection[str] = (),
) -> dict[str, Any]:
    """Summarize the configuration of a request for logging."""

    if prepared is not None:
        method = prepared.method
        url = prepared.url
        headers = prepared.headers
    return {
        "method": method,
        "url": url,
        "headers": redact_headers(headers, sensitive_headers),
        "timeout": timeout,
    }


def ensure_success(
    response: Response,
    *,
    timeout: float | None = None,
    sensitive_headers: Collection[str] = (),
) -> None:
    """Raise `TransportError` if the response signals a failure."""

    if 200 <= response.status_code < 300:
        return
    message = f"HTTP {response.status_code} for {response.request.method} {response.url}"
    raise TransportError(
        message,
        status_code=response.status_code,
        details=response.text[:200],
        body=decode_body(response),
        request_config=describe_request(
            response.request, timeout=timeout, sensitive_headers=sensitive_headers
        ),
    )


def request(
    session: Session,
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    json_payload: Any | None = None,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
    sensitive_headers: Collection[str] = (),
) -> HttpResponse:
    """Make a request and return a parsed response envelope."""

    try:
        response = session.request(
            method=method,
            url=url,
            headers=headers,
            json=json_payload,
            timeout=timeout,
            verify=verify,
        )
    except requests.RequestException as exc:
        reason = str(exc).strip() or exc.__class__.__name__
        raise TransportError(
            f"Request failed: {reason}",
            details=reason,
            request_config=describe_request(
                exc.request if isinstance(exc.request, PreparedRequest) else None,
                method=method,
                url=url,
                headers={**session.headers, **(headers or {})},
                timeout=timeout,
                sensitive_headers=sensitive_headers,
            ),
        ) from exc
    ensure_success(response, timeout=timeout, sensitive_headers=sensitive_headers)
    return HttpResponse(
        status_code=response.status_code,
        data=decode_body(response),
        headers=response.headers,
    )
