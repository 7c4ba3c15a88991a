"""Plugin exposing the Demo App inventory service as declarative resources.

Layers follow a hexagonal split: ``domain`` (value objects, ports, schemas),
``adapters`` (HTTP and filesystem I/O), ``usecases`` (orchestrator-facing
resources) and ``app`` (composition root).
"""

__version__ = "0.1.0"
