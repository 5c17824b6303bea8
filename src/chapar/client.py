"""High-level Chapar client."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth import AuthToken, resolve_auth_token
from .config import (
    DEFAULT_AUTHORIZATION_KEY,
    DEFAULT_SUCCESS_STATUS_CODES,
    BaseUrlSpec,
    ClientConfig,
    RequestSpec,
    UrlSpec,
)
from .exceptions import ChaparError
from .http import HttpResponse, redact_headers
from .http import request as http_request
from .interceptors import StatusCallback, StatusInterceptor
from .results import ResultEnvelope, get_field
from .success import CheckStatusFunc, SuccessEvaluator
from .urls import build_url

logger = logging.getLogger(__name__)

OnErrorCallback = Callable[[Exception], Any]
MetaDataFn = Callable[[Any], Any]
DtoFn = Callable[[Any, Any], Any]

_BODY_METHODS = frozenset({"post", "put", "patch", "delete"})


class ChaparClient:
    """Send requests and normalize every outcome into a `ResultEnvelope`."""

    def __init__(
        self,
        *,
        base_url: BaseUrlSpec | None = None,
        auth_token: AuthToken | None = None,
        authorization_key: str | None = None,
        data_key: str | None = None,
        message_key: str | None = None,
        success_key: str | None = None,
        timeout: float | None = None,
        throw_error: bool = False,
        on_error: OnErrorCallback | None = None,
        check_status_func: CheckStatusFunc | None = None,
        meta_data_fn: MetaDataFn | None = None,
        verify_ssl: bool | str = True,
        default_headers: Mapping[str, str] | None = None,
        success_status_codes: tuple[int, ...] = DEFAULT_SUCCESS_STATUS_CODES,
        session: requests.Session | None = None,
    ) -> None:
        self.config = ClientConfig(
            base_url=base_url,
            authorization_key=authorization_key or DEFAULT_AUTHORIZATION_KEY,
            success_key=success_key or "success",
            message_key=message_key or "message",
            data_key=data_key or "data",
            timeout=timeout or 5.0,
            throw_error=bool(throw_error),
            success_status_codes=tuple(success_status_codes),
            verify_ssl=verify_ssl,
            default_headers=default_headers,
        )
        self.auth_token = auth_token
        self.on_error = on_error
        self.meta_data_fn = meta_data_fn
        self._evaluator = SuccessEvaluator(
            success_key=self.config.success_key,
            success_status_codes=self.config.success_status_codes,
            check_status_func=check_status_func,
        )
        self._suppress_insecure_warning_if_needed()
        self._session = session or requests.Session()
        self._session.headers.update(self.config.resolved_headers())

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> ChaparClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    async def __aenter__(self) -> ChaparClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Public API --------------------------------------------------------------
    @property
    def base_url(self) -> BaseUrlSpec | None:
        return self.config.base_url

    @property
    def check_status_func(self) -> CheckStatusFunc | None:
        return self._evaluator.check_status_func

    @check_status_func.setter
    def check_status_func(self, func: CheckStatusFunc | None) -> None:
        self._evaluator.check_status_func = func

    def setup_interceptors(
        self,
        *,
        on_400: StatusCallback | None = None,
        on_401: StatusCallback | None = None,
        on_404: StatusCallback | None = None,
        on_500: StatusCallback | None = None,
    ) -> StatusInterceptor:
        """Register callbacks fired for failed responses with the matching status.

        Callbacks run on the worker thread that performs the request, not on the
        event loop, so they must not touch loop-bound objects directly. Calling
        this again stacks another set of callbacks.
        """

        interceptor = StatusInterceptor(
            {400: on_400, 401: on_401, 404: on_404, 500: on_500},
            message_key=self.config.message_key,
        )
        self._session.hooks["response"].append(interceptor)
        return interceptor

    def create_url(self, url: str | UrlSpec, base_url_key: str | None = None) -> str:
        return build_url(self.config.base_url, url, base_url_key)

    def is_success(self, status_code: int, body: Any) -> bool:
        return self._evaluator.is_success(status_code, body)

    async def send(
        self,
        url: str | UrlSpec,
        *,
        method: str = "get",
        body: Any | None = None,
        headers: Mapping[str, str] | None = None,
        attach_auth_token: bool = False,
        base_url_key: str | None = None,
        throw_error: bool | None = None,
        dto: DtoFn | None = None,
    ) -> ResultEnvelope[Any]:
        """Perform one request and fold the outcome into a `ResultEnvelope`.

        Transport failures, and exceptions raised by ``dto``, ``meta_data_fn`` or
        ``check_status_func``, are reported to ``on_error`` and logged, then either
        raised as `ChaparError` or returned as a failed envelope. A per-call
        ``throw_error`` overrides the client default when given.
        """

        spec = RequestSpec(
            method=(method or "get").lower(),
            body=body,
            headers=dict(headers or {}),
            attach_auth_token=attach_auth_token,
            base_url_key=base_url_key,
            throw_error=throw_error,
            dto=dto,
        )
        final_url = self.create_url(url, spec.base_url_key)
        if spec.attach_auth_token:
            token = resolve_auth_token(self.auth_token)
            if token:
                spec.headers[self.config.authorization_key] = token

        self._log_request(spec, final_url)
        try:
            response = await asyncio.to_thread(self._perform_request, spec, final_url)
            return self._normalize(response, spec)
        except Exception as exc:
            return self._handle_failure(exc, spec, final_url)

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _perform_request(self, spec: RequestSpec, url: str) -> HttpResponse:
        if spec.method in _BODY_METHODS:
            method, payload = spec.method, spec.body
        else:
            method, payload = "get", None
        return http_request(
            self._session,
            method.upper(),
            url,
            headers=spec.headers,
            json_payload=payload,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            sensitive_headers=(self.config.authorization_key,),
        )

    def _normalize(self, response: HttpResponse, spec: RequestSpec) -> ResultEnvelope[Any]:
        body = response.data
        success = self._evaluator.is_success(response.status_code, body)
        # Falsy data fields (0, "", False, []) fall back to the whole body.
        payload = get_field(body, self.config.data_key) or body
        meta_data = self.meta_data_fn(body) if self.meta_data_fn else None
        return ResultEnvelope(
            success=success,
            status_code=response.status_code,
            data=spec.dto(payload, meta_data) if spec.dto else payload,
            meta_data=meta_data,
            message=get_field(body, self.config.message_key),
        )

    def _handle_failure(
        self, exc: Exception, spec: RequestSpec, url: str
    ) -> ResultEnvelope[Any]:
        if self.on_error is not None:
            self.on_error(exc)
        request_config = getattr(exc, "request_config", None) or {
            "method": spec.method.upper(),
            "url": url,
            "headers": redact_headers(spec.headers, (self.config.authorization_key,)),
            "timeout": self.config.timeout,
        }
        logger.error(
            "Request Error: %s",
            json.dumps(request_config, default=str),
            exc_info=exc,
        )
        status_code = getattr(exc, "status_code", None)
        if self._should_throw(spec.throw_error):
            raise ChaparError(
                get_field(getattr(exc, "body", None), self.config.message_key),
                status_code=status_code,
                details=getattr(exc, "details", None),
            ) from exc
        return ResultEnvelope.failure(status_code=status_code)

    def _should_throw(self, throw_error: bool | None) -> bool:
        if throw_error is not None:
            return bool(throw_error)
        return self.config.throw_error

    def _log_request(self, spec: RequestSpec, url: str) -> None:
        logger.info(
            "Chapar request %s %s (base_url_key=%s)",
            spec.method.upper(),
            url,
            spec.base_url_key or "default",
        )

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
