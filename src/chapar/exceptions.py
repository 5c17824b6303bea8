"""Custom exception hierarchy for the Chapar client."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ChaparError(RuntimeError):
    """Normalized error surfaced to callers that opt into raising."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class TransportError(ChaparError):
    """Raised by the transport when an exchange fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: Any | None = None,
        body: Any | None = None,
        request_config: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.body = body
        self.request_config = dict(request_config or {})
