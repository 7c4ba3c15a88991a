"""Provider composition layer.

Builds the shared HTTP client from settings and wires adapters into the
resources exposed to the orchestrator.
"""

from .provider import DemoAppProvider
from .settings import ProviderSettings

__all__ = ["DemoAppProvider", "ProviderSettings"]
