from __future__ import annotations
import json, os, tempfile
from typing import Any, Dict, Optional
from demoapp_provider.domain.ports import StatePort


class StateLocal(StatePort):
    """Local JSON file holding the orchestrator-side mirror of managed records.

    Layout::

        {"version": 1, "resources": {"demoapp_item.web": {"type": "demoapp_item",
                                                          "attributes": {...}}}}
    """

    FILE_NAME = "state.json"
    VERSION = 1

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.FILE_NAME)

    # ---- Whole-file access ----
    def load(self) -> Dict[str, Dict[str, Any]]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        resources = doc.get("resources") if isinstance(doc, dict) else None
        if not isinstance(resources, dict):
            raise ValueError(f"Malformed state file: {self.path}")
        return {str(k): dict(v) for k, v in resources.items() if isinstance(v, dict)}

    def save(self, records: Dict[str, Dict[str, Any]]) -> None:
        os.makedirs(self.root, exist_ok=True)
        doc = {"version": self.VERSION, "resources": records}
        # write to a sibling temp file so a crash never leaves a truncated state
        fd, tmp = tempfile.mkstemp(prefix=".state-", suffix=".json", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    # ---- Single records ----
    def get(self, address: str) -> Optional[Dict[str, Any]]:
        return self.load().get(address)

    def put(self, address: str, type_name: str, attributes: Dict[str, Any]) -> None:
        records = self.load()
        records[address] = {"type": type_name, "attributes": dict(attributes)}
        self.save(records)

    def remove(self, address: str) -> bool:
        records = self.load()
        if records.pop(address, None) is None:
            return False
        self.save(records)
        return True
