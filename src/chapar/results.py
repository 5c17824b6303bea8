"""Normalized result envelope returned by `ChaparClient.send`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class ResultEnvelope(Generic[T]):
    """Uniform outcome of a request regardless of verb or base URL."""

    success: bool
    status_code: int | None = None
    data: T | None = None
    meta_data: Any | None = None
    message: str | None = None

    @classmethod
    def failure(
        cls, *, status_code: int | None = None, message: str | None = None
    ) -> ResultEnvelope[Any]:
        return cls(success=False, status_code=status_code, message=message)

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "status_code": self.status_code,
            "data": self.data,
            "meta_data": self.meta_data,
            "message": self.message,
        }


def get_field(body: Any, key: str) -> Any:
    """Read `key` from a decoded response body; non-mapping bodies have no fields."""

    if isinstance(body, Mapping):
        return body.get(key)
    return None
