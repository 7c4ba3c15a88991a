"""Session and response doubles shared by adapter and resource tests."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Dict, List, Optional

from demoapp_provider.adapters.api_errors import TransportError
from demoapp_provider.adapters.http_client import DemoAppClient
from demoapp_provider.domain.context import OperationContext

class ResponseStub:
    """Minimal ``requests.Response`` double."""

    def __init__(self, status_code: int, text: str = "", *, content: Optional[bytes] = None) -> None:
        self.status_code = status_code
        self.content = text.encode("utf-8") if content is None else content
        self.text = text
        self.closed = False

    @classmethod
    def json_body(cls, status_code: int, payload: Any) -> "ResponseStub":
        return cls(status_code, json.dumps(payload))

    def json(self) -> Any:
        return json.loads(self.text)

    def close(self) -> None:
        self.closed = True

class ScriptedSession:
    """Session double returning queued responses and recording every call."""

    def __init__(self, *responses: ResponseStub, error: Optional[Exception] = None) -> None:
        self._responses = list(responses)
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _next(self, method: str, url: str, body: Optional[str], ctx: Any) -> ResponseStub:
        self.calls.append({"method": method, "url": url, "body": body, "ctx": ctx})
        if self.error is not None:
            raise self.error
        if not self._responses:
            raise RuntimeError("No stub response configured")
        return self._responses.pop(0)

    def get(self, url: str, *, ctx: Any = None) -> ResponseStub:
        return self._next("GET", url, None, ctx)

    def post(self, url: str, *, body: Optional[str] = None, ctx: Any = None) -> ResponseStub:
        return self._next("POST", url, body, ctx)

    def put(self, url: str, *, body: Optional[str] = None, ctx: Any = None) -> ResponseStub:
        return self._next("PUT", url, body, ctx)

    def delete(self, url: str, *, ctx: Any = None) -> ResponseStub:
        return self._next("DELETE", url, None, ctx)

    def close(self) -> None:
        pass

class FakeInventoryService:
    """In-memory stand-in for the Demo App API at the session level.

    Implements ``/api/items`` and ``/api/display`` with the same status codes
    as the real service so the REST adapters can be driven end to end.
    """

    def __init__(self, base_url: str = "http://demo.local", *, first_id: int = 1) -> None:
        self.base_url = base_url
        self.items: Dict[int, Dict[str, Any]] = {}
        self.display = "{}"
        self.next_id = first_id
        self.calls: List[str] = []
        self.down = False
        self._lock = threading.Lock()

    def client(self) -> DemoAppClient:
        return DemoAppClient(self.base_url, self)  # type: ignore[arg-type]

    # ---- session surface ----
    def get(self, url: str, *, ctx: Optional[OperationContext] = None) -> ResponseStub:
        return self._handle("GET", url, None)

    def post(self, url: str, *, body: Optional[str] = None, ctx: Optional[OperationContext] = None) -> ResponseStub:
        return self._handle("POST", url, body)

    def put(self, url: str, *, body: Optional[str] = None, ctx: Optional[OperationContext] = None) -> ResponseStub:
        return self._handle("PUT", url, body)

    def delete(self, url: str, *, ctx: Optional[OperationContext] = None) -> ResponseStub:
        return self._handle("DELETE", url, None)

    def close(self) -> None:
        pass

    # ---- routing ----
    def _handle(self, method: str, url: str, body: Optional[str]) -> ResponseStub:
        with self._lock:
            self.calls.append(f"{method} {url}")
            if self.down:
                raise TransportError("Could not send HTTP request: connection refused")
            path = url[len(self.base_url):]
            if path == "/api/display":
                return self._display(method, body)
            if path == "/api/items" and method == "POST":
                return self._create(body)
            if path.startswith("/api/items/"):
                return self._item(method, path.rsplit("/", 1)[1], body)
            return ResponseStub(404, "404 page not found")

    def _display(self, method: str, body: Optional[str]) -> ResponseStub:
        if method == "GET":
            return ResponseStub(200, self.display)
        if method == "POST":
            self.display = body or ""
            return ResponseStub.json_body(200, {"status": "ok"})
        return ResponseStub(405, "method not allowed")

    def _create(self, body: Optional[str]) -> ResponseStub:
        payload = json.loads(body or "{}")
        item = {
            "id": self.next_id,
            "name": payload.get("name", ""),
            "description": payload.get("description", ""),
        }
        self.items[self.next_id] = item
        self.next_id += 1
        return ResponseStub.json_body(201, item)

    def _item(self, method: str, raw_id: str, body: Optional[str]) -> ResponseStub:
        if not raw_id.isdigit():
            return ResponseStub(400, "invalid id")
        item_id = int(raw_id)
        item = self.items.get(item_id)
        if method == "DELETE":
            if item is None:
                return ResponseStub(404, "item not found")
            del self.items[item_id]
            return ResponseStub(204, "")
        if item is None:
            return ResponseStub(404, "item not found")
        if method == "GET":
            return ResponseStub.json_body(200, item)
        if method == "PUT":
            payload = json.loads(body or "{}")
            item = {"id": item_id, "name": payload.get("name", ""), "description": payload.get("description", "")}
            self.items[item_id] = item
            return ResponseStub.json_body(200, item)
        return ResponseStub(405, "method not allowed")


class LocalHttpServer:
    """Real HTTP server on 127.0.0.1 whose GET answer is driven by ``respond``.

    ``respond(handler, release)`` writes the whole response. ``release`` is set on
    ``close()`` so handlers blocked on it finish quickly.
    """

    def __init__(self, respond: Callable[[BaseHTTPRequestHandler, threading.Event], None]) -> None:
        self.release = threading.Event()
        release = self.release

        class _Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:  # noqa: N802
                try:
                    respond(self, release)
                except (BrokenPipeError, ConnectionResetError):
                    pass

            def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
                pass

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        self.server.daemon_threads = True
        self._thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self._thread.start()

    @property
    def base_url(self) -> str:
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}"

    def close(self) -> None:
        self.release.set()
        self.server.shutdown()
        self.server.server_close()


__all__ = ["FakeInventoryService", "LocalHttpServer", "ResponseStub", "ScriptedSession"]
