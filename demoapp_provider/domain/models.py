"""Value objects exchanged between adapters and resources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from demoapp_provider.domain.errors import ValidationError

DISPLAY_ID = "display"


@dataclass(frozen=True)
class ItemDraft:
    """Caller-supplied fields for item create/update."""

    name: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Item name must be a non-empty string.", attribute="name")
        if self.description is not None and not isinstance(self.description, str):
            raise ValidationError("Item description must be a string.", attribute="description")

    def to_payload(self) -> dict:
        return {"name": self.name, "description": self.description or ""}


@dataclass(frozen=True)
class Item:
    """Authoritative item record as echoed by the service."""

    id: str
    name: str
    description: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Item":
        """Build an item from a decoded ``{id, name, description}`` object."""
        raw_id = payload.get("id")
        if raw_id is None or isinstance(raw_id, bool) or str(raw_id).strip() == "":
            raise ValueError("Missing id in item response.")
        if isinstance(raw_id, float):
            if not raw_id.is_integer():
                raise ValueError(f"Item id is not an integer: {raw_id!r}")
            raw_id = int(raw_id)
        return cls(
            id=str(raw_id),
            name=str(payload.get("name") or ""),
            description=str(payload.get("description") or ""),
        )


@dataclass(frozen=True)
class Display:
    """The singleton display panel content; ``data`` is opaque JSON text."""

    data: str
    id: str = DISPLAY_ID


@dataclass(frozen=True)
class NotFound:
    """Read outcome meaning the record no longer exists remotely."""

    resource_type: str
    resource_id: str


def validate_json(data: Any, *, attribute: str = "data") -> str:
    """Return ``data`` unchanged if it is syntactically valid JSON text."""
    if not isinstance(data, str):
        raise ValidationError(f"'{attribute}' must be a JSON string.", attribute=attribute)
    try:
        json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ValidationError(
            f"The '{attribute}' attribute must be valid JSON: {exc}",
            attribute=attribute,
        ) from exc
    return data


def _reject_constant(token: str) -> Any:
    # NaN/Infinity are accepted by the json module but are not JSON.
    raise ValueError(f"Invalid JSON constant {token!r}")


__all__ = ["DISPLAY_ID", "Display", "Item", "ItemDraft", "NotFound", "validate_json"]
