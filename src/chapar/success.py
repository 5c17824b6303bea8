"""Success detection for completed exchanges."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .config import DEFAULT_SUCCESS_STATUS_CODES
from .results import get_field

CheckStatusFunc = Callable[[int, Any], bool]


class SuccessEvaluator:
    """Decide whether a response counts as success.

    A custom ``check_status_func`` replaces the default rule entirely. The
    default accepts either a success status code or a truthy success field in
    the body, so a body flag can mark an unconventional status as success.
    """

    def __init__(
        self,
        *,
        success_key: str = "success",
        success_status_codes: Iterable[int] = DEFAULT_SUCCESS_STATUS_CODES,
        check_status_func: CheckStatusFunc | None = None,
    ) -> None:
        self.success_key = success_key
        self.success_status_codes = frozenset(success_status_codes)
        self.check_status_func = check_status_func

    def is_success(self, status_code: int, body: Any) -> bool:
        if callable(self.check_status_func):
            return bool(self.check_status_func(status_code, body))
        return status_code in self.success_status_codes or bool(
            get_field(body, self.success_key)
        )
