"""Orchestrator-facing ``demoapp_item`` resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.models import Item, ItemDraft, NotFound
from demoapp_provider.domain.ports import ItemPort, ResourceState, UseCaseError
from demoapp_provider.domain.schema import Attribute, AttributeKind, ResourceSchema
from demoapp_provider.usecases.error_mapping import map_adapter_error

ITEM_SCHEMA = ResourceSchema(
    description="Manages an item in the Demo App.",
    attributes=(
        Attribute("id", AttributeKind.COMPUTED, "The unique identifier of the item."),
        Attribute("name", AttributeKind.REQUIRED, "The name of the item."),
        Attribute("description", AttributeKind.OPTIONAL, "A description of the item."),
    ),
)


@dataclass
class ItemResource:
    """Create/read/update/delete for server-assigned-id items.

    States are plain dicts ``{"id", "name", "description"}``. Input dicts are
    never mutated; every operation returns a fresh state so a failed call
    leaves the caller's persisted copy untouched.
    """

    item_port: ItemPort
    type_name: str = "demoapp_item"
    schema: ResourceSchema = ITEM_SCHEMA

    def create(self, plan: ResourceState, ctx: Optional[OperationContext] = None) -> ResourceState:
        try:
            cleaned = self.schema.validate_plan(plan)
            draft = ItemDraft(name=cleaned["name"], description=cleaned.get("description"))
            item = self.item_port.create(draft, ctx)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_adapter_error(exc, summary="Error Creating Item") from exc
        return self._state(item, previous_description=cleaned.get("description"))

    def read(
        self, state: ResourceState, ctx: Optional[OperationContext] = None
    ) -> Optional[ResourceState]:
        """Refresh ``state`` from the service; ``None`` means drop it."""
        item_id = self._require_id(state, summary="Error Reading Item")
        try:
            result = self.item_port.read(item_id, ctx)
        except Exception as exc:
            raise map_adapter_error(exc, summary="Error Reading Item") from exc
        if isinstance(result, NotFound):
            return None
        return self._state(result, previous_description=state.get("description"))

    def update(
        self,
        plan: ResourceState,
        state: ResourceState,
        ctx: Optional[OperationContext] = None,
    ) -> ResourceState:
        item_id = self._require_id(state, summary="Error Updating Item")
        planned_id = (plan or {}).get("id")
        if planned_id is not None and str(planned_id) != item_id:
            raise UseCaseError(
                "INVALID_INPUT",
                f"Item id cannot change (state {item_id}, plan {planned_id}).",
                summary="Error Updating Item",
            )
        try:
            cleaned = self.schema.validate_plan({k: v for k, v in (plan or {}).items() if k != "id"})
            draft = ItemDraft(name=cleaned["name"], description=cleaned.get("description"))
            item = self.item_port.update(item_id, draft, ctx)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_adapter_error(exc, summary="Error Updating Item") from exc
        return self._state(item, previous_description=cleaned.get("description"))

    def delete(self, state: ResourceState, ctx: Optional[OperationContext] = None) -> None:
        item_id = self._require_id(state, summary="Error Deleting Item")
        try:
            self.item_port.delete(item_id, ctx)
        except Exception as exc:
            raise map_adapter_error(exc, summary="Error Deleting Item") from exc

    def import_state(self, resource_id: str) -> ResourceState:
        """Seed a state from an id; the caller follows up with ``read``."""
        normalized = str(resource_id or "").strip()
        if not normalized:
            raise UseCaseError("INVALID_INPUT", "Import id is required.", summary="Error Importing Item")
        return {"id": normalized, "name": None, "description": None}

    # ------------------------------------------------------------------
    @staticmethod
    def _require_id(state: ResourceState, *, summary: str) -> str:
        item_id = str((state or {}).get("id") or "").strip()
        if not item_id:
            raise UseCaseError("INVALID_STATE", "State has no item id.", summary=summary)
        return item_id

    @staticmethod
    def _state(item: Item, *, previous_description: Any) -> Dict[str, Any]:
        # The service echoes a missing description as "", keep it unset then.
        description: Optional[str] = item.description
        if description == "" and previous_description is None:
            description = None
        return {"id": item.id, "name": item.name, "description": description}


__all__ = ["ITEM_SCHEMA", "ItemResource"]
