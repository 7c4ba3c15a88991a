"""Orchestrator-facing ``demoapp_display`` resource (singleton)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.models import DISPLAY_ID, Display
from demoapp_provider.domain.ports import DisplayPort, ResourceState, UseCaseError
from demoapp_provider.domain.schema import Attribute, AttributeKind, ResourceSchema
from demoapp_provider.usecases.error_mapping import map_adapter_error

_log = logging.getLogger(__name__)

DISPLAY_SCHEMA = ResourceSchema(
    description=(
        "Manages the display panel content in Demo App. "
        "Posts arbitrary JSON data that the frontend renders."
    ),
    attributes=(
        Attribute(
            "id",
            AttributeKind.COMPUTED,
            "Placeholder ID (always 'display' since there's only one display panel).",
        ),
        Attribute("data", AttributeKind.REQUIRED, "JSON string to display."),
    ),
)


@dataclass
class DisplayResource:
    """Whole-value replace semantics over the one display panel.

    Declaring more than one ``demoapp_display`` makes them overwrite each
    other; the last write wins.
    """

    display_port: DisplayPort
    type_name: str = "demoapp_display"
    schema: ResourceSchema = DISPLAY_SCHEMA

    def create(self, plan: ResourceState, ctx: Optional[OperationContext] = None) -> ResourceState:
        return self._write(plan, ctx, summary="Error Creating Display")

    def read(
        self, state: ResourceState, ctx: Optional[OperationContext] = None
    ) -> Optional[ResourceState]:
        """Refresh from the service. Never signals not-found."""
        try:
            display = self.display_port.read(ctx)
        except Exception as exc:
            raise map_adapter_error(exc, summary="Error Reading Display") from exc
        return self._state(display)

    def update(
        self,
        plan: ResourceState,
        state: ResourceState,
        ctx: Optional[OperationContext] = None,
    ) -> ResourceState:
        return self._write(plan, ctx, summary="Error Updating Display")

    def delete(self, state: ResourceState, ctx: Optional[OperationContext] = None) -> None:
        """Clear the panel; the record is dropped even if clearing failed."""
        if not self.display_port.clear(ctx):
            _log.warning("Display was not cleared remotely; removing it from state anyway.")

    def import_state(self, resource_id: str) -> ResourceState:
        """Seed a state for the one panel.

        ``resource_id`` is ignored: whatever id the caller imports under, the
        state always carries the ``"display"`` id, and ``read`` fills ``data``.
        """
        return {"id": DISPLAY_ID, "data": None}

    # ------------------------------------------------------------------
    def _write(self, plan: ResourceState, ctx: Optional[OperationContext], *, summary: str) -> ResourceState:
        try:
            cleaned = self.schema.validate_plan({k: v for k, v in (plan or {}).items() if k != "id"})
            display = self.display_port.write(cleaned["data"], ctx)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_adapter_error(exc, summary=summary) from exc
        return self._state(display)

    @staticmethod
    def _state(display: Display) -> ResourceState:
        return {"id": DISPLAY_ID, "data": display.data}


__all__ = ["DISPLAY_SCHEMA", "DisplayResource"]
