"""REST adapter for the singleton ``/api/display`` panel."""

from __future__ import annotations

import logging
from typing import Optional

from demoapp_provider.adapters.api_errors import AdapterError, ApiResponseError, raise_for_status
from demoapp_provider.adapters.http_client import DemoAppClient
from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.models import DISPLAY_ID, Display, validate_json
from demoapp_provider.domain.ports import DisplayPort

_WRITE_OK = (200, 201)
_EMPTY_DISPLAY = "{}"


class DisplayRestAdapter(DisplayPort):
    """HTTP adapter for the display panel.

    There is exactly one display. Every write replaces the whole value, so
    several declarations pointing at it overwrite each other (last writer wins).
    """

    def __init__(self, client: DemoAppClient) -> None:
        self.client = client
        self._log = logging.getLogger(__name__)

    def write(self, data: str, ctx: Optional[OperationContext] = None) -> Display:
        """Validate ``data`` as JSON, then POST it verbatim."""
        validate_json(data)
        url = self.client.url("/api/display")
        resp = self.client.session.post(url, body=data, ctx=ctx)
        if resp.status_code not in _WRITE_OK:
            raise_for_status(resp, "write_display")
        return Display(data=data, id=DISPLAY_ID)

    def read(self, ctx: Optional[OperationContext] = None) -> Display:
        """GET the panel; the raw UTF-8 body is stored as ``data`` without re-encoding."""
        url = self.client.url("/api/display")
        resp = self.client.session.get(url, ctx=ctx)
        if resp.status_code != 200:
            raise_for_status(resp, "read_display")
        try:
            data = resp.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ApiResponseError(
                f"read_display: Response body is not valid UTF-8: {exc}",
                status=resp.status_code,
                context="read_display",
            ) from exc
        return Display(data=data, id=DISPLAY_ID)

    def clear(self, ctx: Optional[OperationContext] = None) -> bool:
        """POST ``{}`` to the panel. Failures are logged, never raised."""
        url = self.client.url("/api/display")
        try:
            resp = self.client.session.post(url, body=_EMPTY_DISPLAY, ctx=ctx)
        except AdapterError as exc:
            self._log.warning("Clearing display failed: %s", exc)
            return False
        if not 200 <= resp.status_code < 300:
            self._log.warning("Clearing display returned HTTP %s.", resp.status_code)
            return False
        return True


__all__ = ["DisplayRestAdapter"]
