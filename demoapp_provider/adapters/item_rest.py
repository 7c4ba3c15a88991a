"""REST adapter for the ``/api/items`` collection."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

import requests

from demoapp_provider.adapters.api_errors import ApiResponseError, raise_for_status
from demoapp_provider.adapters.http_client import DemoAppClient
from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.errors import ValidationError
from demoapp_provider.domain.models import Item, ItemDraft, NotFound
from demoapp_provider.domain.ports import ItemId, ItemPort

_CREATE_OK = (200, 201)
_READ_OK = (200,)
_UPDATE_OK = (200,)
_DELETE_OK = (200, 204, 404)


class ItemRestAdapter(ItemPort):
    """HTTP adapter mapping item CRUD onto ``POST/GET/PUT/DELETE /api/items``.

    The adapter keeps no per-call state; one instance may serve concurrent
    operations on different items.
    """

    def __init__(self, client: DemoAppClient) -> None:
        self.client = client
        self._log = logging.getLogger(__name__)

    def create(self, draft: ItemDraft, ctx: Optional[OperationContext] = None) -> Item:
        """POST the draft; the echoed record becomes authoritative."""
        url = self.client.url("/api/items")
        resp = self.client.session.post(url, body=self._encode(draft), ctx=ctx)
        self._ensure_status(resp, _CREATE_OK, "create_item")
        item = self._decode_item(resp, "create_item")
        self._log.info("Created item %s (%s).", item.id, item.name)
        return item

    def read(
        self, item_id: ItemId, ctx: Optional[OperationContext] = None
    ) -> Union[Item, NotFound]:
        """GET one item; a 404 yields ``NotFound`` instead of an error."""
        url = self._item_url(item_id)
        resp = self.client.session.get(url, ctx=ctx)
        if resp.status_code == 404:
            self._log.info("Item %s no longer exists remotely.", item_id)
            return NotFound("item", str(item_id))
        self._ensure_status(resp, _READ_OK, f"read_item[{item_id}]")
        return self._decode_item(resp, f"read_item[{item_id}]")

    def update(
        self, item_id: ItemId, draft: ItemDraft, ctx: Optional[OperationContext] = None
    ) -> Item:
        """PUT both fields; the echoed record replaces the caller's copy."""
        url = self._item_url(item_id)
        resp = self.client.session.put(url, body=self._encode(draft), ctx=ctx)
        self._ensure_status(resp, _UPDATE_OK, f"update_item[{item_id}]")
        return self._decode_item(resp, f"update_item[{item_id}]")

    def delete(self, item_id: ItemId, ctx: Optional[OperationContext] = None) -> None:
        """DELETE one item; an already-absent item counts as deleted."""
        url = self._item_url(item_id)
        resp = self.client.session.delete(url, ctx=ctx)
        self._ensure_status(resp, _DELETE_OK, f"delete_item[{item_id}]")
        if resp.status_code == 404:
            self._log.debug("Item %s was already absent.", item_id)

    # ------------------------------------------------------------------
    def _item_url(self, item_id: ItemId) -> str:
        normalized = str(item_id or "").strip()
        if not normalized:
            raise ValidationError("Item id is required.", attribute="id")
        return self.client.url(f"/api/items/{normalized}")

    @staticmethod
    def _encode(draft: ItemDraft) -> str:
        return json.dumps(draft.to_payload())

    @staticmethod
    def _ensure_status(resp: requests.Response, accepted: tuple, ctx: str) -> None:
        """Raise typed adapter errors for statuses outside ``accepted``."""
        if resp.status_code in accepted:
            return
        raise_for_status(resp, ctx)

    @staticmethod
    def _decode_item(resp: requests.Response, ctx: str) -> Item:
        """Parse an ``{id, name, description}`` body into an ``Item``."""
        try:
            payload: Any = resp.json()
        except Exception as exc:
            snippet = getattr(resp, "text", "")[:400]
            raise ApiResponseError(
                f"{ctx}: Could not parse API response: {snippet}",
                status=resp.status_code,
                body=getattr(resp, "text", ""),
                context=ctx,
            ) from exc
        if not isinstance(payload, dict):
            raise ApiResponseError(
                f"{ctx}: Invalid JSON response shape: expected object",
                status=resp.status_code,
                body=getattr(resp, "text", ""),
                payload=payload,
                context=ctx,
            )
        try:
            return Item.from_payload(dict(payload))
        except ValueError as exc:
            raise ApiResponseError(
                f"{ctx}: {exc}",
                status=resp.status_code,
                body=getattr(resp, "text", ""),
                payload=payload,
                context=ctx,
            ) from exc


__all__ = ["ItemRestAdapter"]
