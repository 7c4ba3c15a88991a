"""Shared HTTP transport for the inventory service adapters.

This module provides a thin wrapper around ``requests.Session`` so the item
and display adapters share one timeout policy, one connection pool and one
way of turning transport failures into typed errors.

Dependencies:
    - ``requests`` for network I/O.
    - ``demoapp_provider.adapters.api_errors`` for typed transport failures.

Call context:
    - ``DemoAppClient`` is constructed once by ``DemoAppProvider.configure``
      and handed to every adapter instance.
    - Used only inside adapter layer methods; resources interact through ports.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import requests
from requests import exceptions as req_exc

from demoapp_provider.adapters.api_errors import (
    RequestCancelledError,
    RequestTimeoutError,
    TransportError,
)
from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.errors import ConfigurationError

ENDPOINT_ENV_VAR = "DEMOAPP_ENDPOINT"
ENDPOINT_CONFIG_KEY = "endpoint"

_POLL_INTERVAL_S = 0.02

_log = logging.getLogger(__name__)


def resolve_endpoint(
    explicit: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Pick the service base URL from configuration, then the environment.

    Args:
        explicit: Value of the provider ``endpoint`` attribute, or ``None``.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Base URL without trailing slash.

    Raises:
        ConfigurationError: If neither source yields a non-empty value.
    """
    env = os.environ if environ is None else environ
    endpoint = explicit if explicit is not None else env.get(ENDPOINT_ENV_VAR, "")
    endpoint = (endpoint or "").strip()
    if not endpoint:
        raise ConfigurationError(
            "The provider cannot create the Demo App API client because the endpoint is missing. "
            f"Set '{ENDPOINT_CONFIG_KEY}' in the provider configuration or via the "
            f"{ENDPOINT_ENV_VAR} environment variable.",
            key=ENDPOINT_CONFIG_KEY,
            env_var=ENDPOINT_ENV_VAR,
        )
    return endpoint.rstrip("/")


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds applied to every request.
        max_workers: Size of the worker pool that runs context-bound requests.
    """
    request_timeout_s: float = 30
    max_workers: int = 16


class ProviderSession:
    """Shared requests wrapper with JSON headers and context-aware timeouts.

    This class is intentionally transport-only. Callers provide endpoint URLs and
    decide how to map non-2xx responses into errors. Nothing is retried.

    Requests carrying an ``OperationContext`` run on a worker thread while the
    caller waits on the context, so a cancel or an expired deadline returns
    control immediately and the in-flight response is closed.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        self.session = requests.Session()
        self.cfg = cfg or HttpConfig()
        self._pool = ThreadPoolExecutor(
            max_workers=self.cfg.max_workers, thread_name_prefix="demoapp-http"
        )

    def get(self, url: str, *, ctx: Optional[OperationContext] = None) -> requests.Response:
        return self._send("GET", url, ctx=ctx)

    def post(
        self, url: str, *, body: Optional[str] = None, ctx: Optional[OperationContext] = None
    ) -> requests.Response:
        return self._send("POST", url, body=body, ctx=ctx)

    def put(
        self, url: str, *, body: Optional[str] = None, ctx: Optional[OperationContext] = None
    ) -> requests.Response:
        return self._send("PUT", url, body=body, ctx=ctx)

    def delete(self, url: str, *, ctx: Optional[OperationContext] = None) -> requests.Response:
        return self._send("DELETE", url, ctx=ctx)

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
        self.session.close()

    @staticmethod
    def _headers(json_body: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _timeout(self, ctx: Optional[OperationContext]) -> float:
        timeout = float(self.cfg.request_timeout_s)
        remaining = ctx.remaining() if ctx is not None else None
        if remaining is not None:
            timeout = max(min(timeout, remaining), 0.001)
        return timeout

    def _send(
        self,
        method: str,
        url: str,
        *,
        body: Optional[str] = None,
        ctx: Optional[OperationContext] = None,
    ) -> requests.Response:
        """Send one request and translate transport failures.

        Raises:
            RequestCancelledError: ``ctx`` fired before or during the exchange.
            RequestTimeoutError: The configured timeout elapsed.
            TransportError: Any other request construction or network failure.
        """
        context = f"{method} {url}"
        if ctx is not None and ctx.cancelled:
            raise RequestCancelledError(f"{context}: {ctx.reason()}", context=context)

        data = None if body is None else body.encode("utf-8")
        headers = self._headers(json_body=body is not None)
        timeout = self._timeout(ctx)
        _log.debug("%s (%d bytes)", context, len(data or b""))
        try:
            if ctx is None:
                resp = self._exchange(method, url, data, headers, timeout)
            else:
                resp = self._exchange_until_done(method, url, data, headers, timeout, ctx, context)
        except req_exc.Timeout as exc:
            if ctx is not None and ctx.cancelled:
                raise RequestCancelledError(f"{context}: {ctx.reason()}", context=context) from exc
            raise RequestTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.RequestException as exc:
            raise TransportError(f"Could not send HTTP request: {exc}", context=context) from exc

        if ctx is not None and ctx.cancelled:
            resp.close()
            raise RequestCancelledError(f"{context}: {ctx.reason()}", context=context)
        _log.debug("%s -> HTTP %s", context, resp.status_code)
        return resp

    def _exchange(
        self,
        method: str,
        url: str,
        data: Optional[bytes],
        headers: Dict[str, str],
        timeout: float,
        inflight: Optional[List[requests.Response]] = None,
    ) -> requests.Response:
        """Run the request and read the full body."""
        resp = self.session.request(
            method, url, data=data, headers=headers, timeout=timeout, stream=True
        )
        if inflight is not None:
            inflight.append(resp)
        resp.content  # noqa: B018  read the body on this thread
        return resp

    def _exchange_until_done(
        self,
        method: str,
        url: str,
        data: Optional[bytes],
        headers: Dict[str, str],
        timeout: float,
        ctx: OperationContext,
        context: str,
    ) -> requests.Response:
        """Wait for the worker or for ``ctx`` to fire, whichever comes first."""
        inflight: List[requests.Response] = []
        future = self._pool.submit(self._exchange, method, url, data, headers, timeout, inflight)
        finished = threading.Event()
        future.add_done_callback(lambda _f: finished.set())
        while not finished.wait(_POLL_INTERVAL_S):
            if not ctx.cancelled:
                continue
            future.cancel()
            future.add_done_callback(_close_late_response)
            for resp in inflight:
                resp.close()
            _log.debug("%s aborted: %s", context, ctx.reason())
            raise RequestCancelledError(f"{context}: {ctx.reason()}", context=context)
        return future.result()


def _close_late_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


@dataclass
class DemoAppClient:
    """Endpoint plus shared session handed to every adapter."""

    endpoint: str
    session: ProviderSession = field(default_factory=ProviderSession)

    @classmethod
    def from_config(
        cls,
        endpoint: Optional[str] = None,
        *,
        request_timeout_s: float = 30,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DemoAppClient":
        resolved = resolve_endpoint(endpoint, environ=environ)
        return cls(resolved, ProviderSession(HttpConfig(request_timeout_s=request_timeout_s)))

    def url(self, path: str) -> str:
        """Build endpoint URL from the base URL and an absolute path."""
        base = self.endpoint[:-1] if self.endpoint.endswith("/") else self.endpoint
        return f"{base}{path}"


__all__ = [
    "DemoAppClient",
    "ENDPOINT_CONFIG_KEY",
    "ENDPOINT_ENV_VAR",
    "HttpConfig",
    "ProviderSession",
    "resolve_endpoint",
]
