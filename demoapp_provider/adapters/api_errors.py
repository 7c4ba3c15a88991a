from __future__ import annotations

from typing import Any, Optional


class AdapterError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message)
        self.context = context


class TransportError(AdapterError):
    """Request construction or network-level failure; no response was received."""


class RequestTimeoutError(TransportError):
    """The fixed per-request timeout elapsed."""


class RequestCancelledError(TransportError):
    """The caller's operation context was cancelled or its deadline passed."""


class ApiError(AdapterError):
    """The service answered with an unexpected status."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        body: str = "",
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status = status
        self.body = body
        self.payload = payload


class ApiClientError(ApiError):
    """HTTP 4xx from the inventory service."""


class ApiServerError(ApiError):
    """HTTP 5xx from the inventory service."""


class ApiResponseError(ApiError):
    """A success status whose body could not be decoded."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, body: str) -> str:
    detail = (body or "").strip()
    if detail:
        return f"{ctx}: API returned status {status}: {detail}"
    return f"{ctx}: API returned status {status}"


def raise_for_status(resp: Any, ctx: str) -> None:
    """Raise the typed ``ApiError`` matching a non-success response."""
    status = resp.status_code
    body = getattr(resp, "text", "") or ""
    payload = parse_error_payload(resp)
    message = build_error_message(ctx, status, body)
    if 400 <= status < 500:
        raise ApiClientError(message, status=status, body=body, payload=payload, context=ctx)
    if 500 <= status < 600:
        raise ApiServerError(message, status=status, body=body, payload=payload, context=ctx)
    raise ApiError(message, status=status, body=body, payload=payload, context=ctx)


__all__ = [
    "AdapterError",
    "ApiClientError",
    "ApiError",
    "ApiResponseError",
    "ApiServerError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "TransportError",
    "build_error_message",
    "parse_error_payload",
    "raise_for_status",
]
