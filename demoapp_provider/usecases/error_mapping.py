"""Translate adapter and domain errors into orchestrator-facing UseCaseError instances."""

from __future__ import annotations


from demoapp_provider.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiResponseError,
    ApiServerError,
    RequestCancelledError,
    RequestTimeoutError,
    TransportError,
)
from demoapp_provider.domain.errors import ConfigurationError, ValidationError
from demoapp_provider.domain.ports import UseCaseError


def map_adapter_error(exc: Exception, *, summary: str) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Failure raised by a port or by pre-flight validation.
        summary: Diagnostic headline such as ``"Error Creating Item"``.

    Returns:
        UseCaseError whose message keeps the underlying detail (status and
        body, or the transport cause) so the caller can diagnose without
        retrying.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ConfigurationError):
        return UseCaseError("CONFIGURATION_ERROR", str(exc), summary=summary)
    if isinstance(exc, ValidationError):
        return UseCaseError("INVALID_INPUT", str(exc), summary=summary)
    if isinstance(exc, RequestCancelledError):
        return UseCaseError("REQUEST_CANCELLED", str(exc), summary=summary)
    if isinstance(exc, RequestTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", f"{exc}. Check connection.", summary=summary)
    if isinstance(exc, TransportError):
        return UseCaseError("TRANSPORT_ERROR", str(exc), summary=summary)
    if isinstance(exc, ApiResponseError):
        return UseCaseError("INVALID_RESPONSE", str(exc), summary=summary)
    if isinstance(exc, ApiClientError):
        code = "NOT_FOUND" if exc.status == 404 else "API_ERROR"
        return UseCaseError(code, str(exc), summary=summary)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", str(exc), summary=summary)
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc), summary=summary)

    return UseCaseError("UNEXPECTED_ERROR", str(exc) or "Unexpected error.", summary=summary)


__all__ = ["map_adapter_error"]
