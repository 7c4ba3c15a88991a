from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from demoapp_provider.adapters.api_errors import ApiClientError, build_error_message
from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.models import DISPLAY_ID, Display, Item, ItemDraft, NotFound, validate_json
from demoapp_provider.domain.ports import DisplayPort, ItemId, ItemPort


@dataclass
class ItemRestMock(ItemPort):
    """Offline substitute for ``ItemRestAdapter`` backed by a dict."""

    first_id: int = 1

    def __post_init__(self) -> None:
        self._items: Dict[ItemId, Item] = {}
        self._ids = itertools.count(self.first_id)
        self._lock = threading.Lock()
        self.calls: List[str] = []

    # ---------- ItemPort ----------

    def create(self, draft: ItemDraft, ctx: Optional[OperationContext] = None) -> Item:
        with self._lock:
            self.calls.append("create")
            item = Item(id=str(next(self._ids)), name=draft.name, description=draft.description or "")
            self._items[item.id] = item
        return item

    def read(
        self, item_id: ItemId, ctx: Optional[OperationContext] = None
    ) -> Union[Item, NotFound]:
        with self._lock:
            self.calls.append("read")
            item = self._items.get(str(item_id))
        if item is None:
            return NotFound("item", str(item_id))
        return item

    def update(
        self, item_id: ItemId, draft: ItemDraft, ctx: Optional[OperationContext] = None
    ) -> Item:
        with self._lock:
            self.calls.append("update")
            if str(item_id) not in self._items:
                raise ApiClientError(
                    build_error_message(f"update_item[{item_id}]", 404, "item not found"),
                    status=404,
                    body="item not found",
                    context=f"update_item[{item_id}]",
                )
            item = Item(id=str(item_id), name=draft.name, description=draft.description or "")
            self._items[item.id] = item
        return item

    def delete(self, item_id: ItemId, ctx: Optional[OperationContext] = None) -> None:
        with self._lock:
            self.calls.append("delete")
            self._items.pop(str(item_id), None)

    # ---------- Test helpers ----------

    def remove_out_of_band(self, item_id: ItemId) -> None:
        """Delete an item as if another client had removed it."""
        with self._lock:
            self._items.pop(str(item_id), None)

    def items(self) -> Dict[ItemId, Item]:
        with self._lock:
            return dict(self._items)


@dataclass
class DisplayRestMock(DisplayPort):
    """Offline substitute for ``DisplayRestAdapter``; ``fail_clear`` simulates an outage."""

    data: str = "{}"
    fail_clear: bool = False

    def write(self, data: str, ctx: Optional[OperationContext] = None) -> Display:
        self.data = validate_json(data)
        return Display(data=data, id=DISPLAY_ID)

    def read(self, ctx: Optional[OperationContext] = None) -> Display:
        return Display(data=self.data, id=DISPLAY_ID)

    def clear(self, ctx: Optional[OperationContext] = None) -> bool:
        if self.fail_clear:
            return False
        self.data = "{}"
        return True


__all__ = ["DisplayRestMock", "ItemRestMock"]
