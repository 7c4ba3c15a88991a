# demoapp_provider/app/provider.py
"""Composition root: configure the shared client once and hand it to resources."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from ..adapters.display_rest import DisplayRestAdapter
from ..adapters.http_client import DemoAppClient, ENDPOINT_ENV_VAR
from ..adapters.item_rest import ItemRestAdapter
from ..adapters.state_local import StateLocal
from ..domain.errors import ConfigurationError
from ..domain.ports import Resource
from ..domain.schema import Attribute, AttributeKind, ResourceSchema
from ..usecases.display_resource import DisplayResource
from ..usecases.item_resource import ItemResource
from ..usecases.refresh_state import RefreshState
from ..utils import logging as logging_utils
from .settings import ProviderSettings

PROVIDER_SCHEMA = ResourceSchema(
    description="Interact with the Demo App API.",
    attributes=(
        Attribute(
            "endpoint",
            AttributeKind.OPTIONAL,
            "The endpoint URL of the Demo App API (e.g., http://localhost:8080). "
            f"Can also be set via {ENDPOINT_ENV_VAR} environment variable.",
        ),
    ),
)

ResourceFactory = Callable[[DemoAppClient], Resource]

_RESOURCE_FACTORIES: List[ResourceFactory] = [
    lambda client: ItemResource(ItemRestAdapter(client)),
    lambda client: DisplayResource(DisplayRestAdapter(client)),
]


class DemoAppProvider:
    """Provider for the ``demoapp`` resource types.

    ``configure`` resolves the endpoint once per provider lifetime; the
    resulting ``DemoAppClient`` is passed explicitly to every adapter.
    """

    type_name = "demoapp"
    schema = PROVIDER_SCHEMA

    def __init__(self, version: str = "dev") -> None:
        self.version = version
        self.client: Optional[DemoAppClient] = None
        self.settings = ProviderSettings()
        self._resources: Dict[str, Resource] = {}
        self._log = logging.getLogger(__name__)

    def configure(
        self,
        endpoint: Optional[str] = None,
        *,
        settings: Optional[ProviderSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> DemoAppClient:
        """Build the shared client.

        Args:
            endpoint: ``endpoint`` attribute from the provider configuration.
            settings: Remaining settings; defaults to ``ProviderSettings()``.
            environ: Environment used for the ``DEMOAPP_ENDPOINT`` fallback.

        Raises:
            ConfigurationError: No endpoint in configuration or environment.
        """
        self.settings = settings or self.settings
        logging_utils.configure_root(self.settings.log_level)
        explicit = endpoint if endpoint is not None else self.settings.endpoint
        client = DemoAppClient.from_config(
            explicit,
            request_timeout_s=self.settings.request_timeout_s,
            environ=environ,
        )
        if self.client is not None:
            self.client.session.close()
        self.client = client
        self._resources = {}
        for factory in _RESOURCE_FACTORIES:
            resource = factory(client)
            self._resources[resource.type_name] = resource
        self._log.info(
            "Configured %s provider %s against %s (timeout %ss).",
            self.type_name,
            self.version,
            client.endpoint,
            self.settings.request_timeout_s,
        )
        return client

    def resources(self) -> List[Resource]:
        self._require_configured()
        return list(self._resources.values())

    def resource(self, type_name: str) -> Resource:
        self._require_configured()
        try:
            return self._resources[type_name]
        except KeyError:
            raise KeyError(f"Unknown resource type '{type_name}'") from None

    def data_sources(self) -> List[object]:
        return []

    def refresh_state(self) -> RefreshState:
        """Drift-detection use case over ``state.json`` in ``settings.state_path``."""
        return RefreshState(self.resources(), StateLocal(self.settings.state_path))

    def close(self) -> None:
        if self.client is not None:
            self.client.session.close()

    def _require_configured(self) -> None:
        if self.client is None:
            raise ConfigurationError(
                "Provider is not configured; call configure() first.",
                key="endpoint",
                env_var=ENDPOINT_ENV_VAR,
            )


__all__ = ["DemoAppProvider", "PROVIDER_SCHEMA"]
