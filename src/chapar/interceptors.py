"""Status-code hooks fired on failed exchanges."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from requests import Response

from .http import decode_body
from .results import ResultEnvelope, get_field

StatusCallback = Callable[[ResultEnvelope[Any]], Any]

logger = logging.getLogger(__name__)


class StatusInterceptor:
    """Session response hook that reports non-2xx responses to per-status callbacks.

    The hook only observes. It always hands the response back untouched, so
    the transport still raises and the dispatcher's failure branch still runs.
    A callback that raises is logged and does not replace the failure.
    """

    def __init__(
        self,
        callbacks: Mapping[int, StatusCallback | None],
        *,
        message_key: str = "message",
    ) -> None:
        self._callbacks: dict[int, StatusCallback] = {
            status: callback for status, callback in callbacks.items() if callback is not None
        }
        self.message_key = message_key

    def __call__(self, response: Response, *args: Any, **kwargs: Any) -> None:
        status_code = response.status_code
        if 200 <= status_code < 300:
            return None
        callback = self._callbacks.get(status_code)
        if callback is None:
            return None
        logger.debug("Dispatching status %s to interceptor callback", status_code)
        result = ResultEnvelope.failure(
            message=get_field(decode_body(response), self.message_key)
        )
        try:
            callback(result)
        except Exception:
            logger.exception("Interceptor callback for status %s failed", status_code)
        return None
