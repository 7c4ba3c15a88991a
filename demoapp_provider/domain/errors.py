"""Domain-level error types raised before any network activity.

Transport and HTTP status failures live in ``demoapp_provider.adapters.api_errors``;
the errors here describe problems with configuration or caller input.
"""

from __future__ import annotations

from typing import Optional


class ConfigurationError(RuntimeError):
    """Provider configuration is missing or unusable."""

    def __init__(self, message: str, *, key: Optional[str] = None, env_var: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key
        self.env_var = env_var


class ValidationError(ValueError):
    """Caller input rejected pre-flight; no request was sent."""

    def __init__(self, message: str, *, attribute: Optional[str] = None) -> None:
        super().__init__(message)
        self.attribute = attribute


__all__ = ["ConfigurationError", "ValidationError"]
