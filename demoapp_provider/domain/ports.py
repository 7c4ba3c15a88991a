from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, Union

from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.models import Display, Item, ItemDraft, NotFound
from demoapp_provider.domain.schema import ResourceSchema

ItemId = str
ResourceState = Dict[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Orchestrator-facing failure carrying a stable code and a summary line."""

    def __init__(self, code: str, message: str, *, summary: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.summary = summary or message


# ---- Ports (Hexagonal boundaries) ----
class ItemPort(Protocol):
    """CRUD against the service-assigned-id item collection."""

    def create(self, draft: ItemDraft, ctx: Optional[OperationContext] = None) -> Item: ...
    def read(
        self, item_id: ItemId, ctx: Optional[OperationContext] = None
    ) -> Union[Item, NotFound]: ...
    def update(
        self, item_id: ItemId, draft: ItemDraft, ctx: Optional[OperationContext] = None
    ) -> Item: ...
    def delete(self, item_id: ItemId, ctx: Optional[OperationContext] = None) -> None: ...


class DisplayPort(Protocol):
    """Singleton display panel: whole-value replace, read, best-effort clear."""

    def write(self, data: str, ctx: Optional[OperationContext] = None) -> Display: ...
    def read(self, ctx: Optional[OperationContext] = None) -> Display: ...
    def clear(self, ctx: Optional[OperationContext] = None) -> bool: ...  # False if the clear failed


class Resource(Protocol):
    """Declarative resource as seen by the orchestrator."""

    type_name: str
    schema: ResourceSchema

    def create(self, plan: ResourceState, ctx: Optional[OperationContext] = None) -> ResourceState: ...
    def read(
        self, state: ResourceState, ctx: Optional[OperationContext] = None
    ) -> Optional[ResourceState]: ...  # None: drop from state
    def update(
        self,
        plan: ResourceState,
        state: ResourceState,
        ctx: Optional[OperationContext] = None,
    ) -> ResourceState: ...
    def delete(self, state: ResourceState, ctx: Optional[OperationContext] = None) -> None: ...
    def import_state(self, resource_id: str) -> ResourceState: ...


class StatePort(Protocol):
    """Persistence for the orchestrator-side mirror of managed records."""

    def load(self) -> Dict[str, Dict[str, Any]]: ...
    def save(self, records: Dict[str, Dict[str, Any]]) -> None: ...
