from __future__ import annotations

from pathlib import Path

import pytest

from demoapp_provider.adapters.inventory_mock import DisplayRestMock, ItemRestMock
from demoapp_provider.adapters.state_local import StateLocal
from demoapp_provider.domain.ports import UseCaseError
from demoapp_provider.usecases.display_resource import DisplayResource
from demoapp_provider.usecases.item_resource import ItemResource
from demoapp_provider.usecases.refresh_state import RefreshState


def test_refresh_drops_deleted_items_and_refreshes_the_rest(tmp_path: Path) -> None:
    items = ItemRestMock()
    display = DisplayRestMock()
    item_resource = ItemResource(items)
    display_resource = DisplayResource(display)
    store = StateLocal(str(tmp_path))

    kept = item_resource.create({"name": "kept"})
    gone = item_resource.create({"name": "gone"})
    panel = display_resource.create({"data": '{"a": 1}'})
    store.put("demoapp_item.kept", "demoapp_item", kept)
    store.put("demoapp_item.gone", "demoapp_item", gone)
    store.put("demoapp_display.panel", "demoapp_display", panel)

    items.remove_out_of_band(gone["id"])
    display.data = '{"a": 2}'

    report = RefreshState([item_resource, display_resource], store)()

    assert report.dropped == ["demoapp_item.gone"]
    assert sorted(report.refreshed) == ["demoapp_display.panel", "demoapp_item.kept"]
    assert store.get("demoapp_item.gone") is None
    assert store.get("demoapp_display.panel")["attributes"]["data"] == '{"a": 2}'
    assert "create" not in items.calls[2:]


def test_refresh_unknown_type_aborts_without_writing(tmp_path: Path) -> None:
    store = StateLocal(str(tmp_path))
    store.put("other.thing", "other_type", {"id": "1"})

    with pytest.raises(UseCaseError) as info:
        RefreshState([ItemResource(ItemRestMock())], store)()

    assert info.value.code == "UNKNOWN_RESOURCE_TYPE"
    assert store.get("other.thing") is not None
