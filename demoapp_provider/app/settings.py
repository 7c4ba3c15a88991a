"""Provider settings resolved from explicit values and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from demoapp_provider.adapters.http_client import ENDPOINT_ENV_VAR
from demoapp_provider.domain.errors import ConfigurationError

TIMEOUT_ENV_VAR = "DEMOAPP_TIMEOUT_S"
STATE_PATH_ENV_VAR = "DEMOAPP_STATE_PATH"
LOG_LEVEL_ENV_VAR = "DEMOAPP_LOG_LEVEL"
DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class ProviderSettings:
    """Values the provider reads once at configuration time.

    Attributes:
        endpoint: Explicit base URL; ``None`` defers to ``DEMOAPP_ENDPOINT``
            when the client is built.
        request_timeout_s: Fixed per-request timeout in seconds.
        state_path: Directory holding ``state.json`` for ``StateLocal``.
        log_level: Root log level unless overridden by the environment.
    """

    endpoint: Optional[str] = None
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    state_path: str = "."
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.request_timeout_s <= 0:
            raise ConfigurationError(
                f"request_timeout_s must be positive, got {self.request_timeout_s!r}.",
                key="request_timeout_s",
                env_var=TIMEOUT_ENV_VAR,
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderSettings":
        env = os.environ if environ is None else environ
        raw_timeout = (env.get(TIMEOUT_ENV_VAR) or "").strip()
        timeout = DEFAULT_TIMEOUT_S
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {raw_timeout!r}.",
                    key="request_timeout_s",
                    env_var=TIMEOUT_ENV_VAR,
                ) from exc
        return cls(
            endpoint=(env.get(ENDPOINT_ENV_VAR) or None),
            request_timeout_s=timeout,
            state_path=env.get(STATE_PATH_ENV_VAR) or ".",
            log_level=env.get(LOG_LEVEL_ENV_VAR) or "INFO",
        )


__all__ = ["DEFAULT_TIMEOUT_S", "ProviderSettings"]
