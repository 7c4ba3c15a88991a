"""Declared attribute schemas for provider and resource types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from demoapp_provider.domain.errors import ValidationError


class AttributeKind(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"


@dataclass(frozen=True)
class Attribute:
    name: str
    kind: AttributeKind
    description: str = ""

    @property
    def settable(self) -> bool:
        """Whether callers may supply this attribute in a plan."""
        return self.kind is not AttributeKind.COMPUTED


@dataclass(frozen=True)
class ResourceSchema:
    """Attribute declarations for one resource type."""

    description: str
    attributes: Tuple[Attribute, ...]

    def attribute(self, name: str) -> Attribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(name)

    def names(self, kind: AttributeKind) -> Tuple[str, ...]:
        return tuple(attr.name for attr in self.attributes if attr.kind is kind)

    def validate_plan(self, plan: Mapping[str, Any]) -> Dict[str, Any]:
        """Check a caller plan against the schema and return a plain copy.

        Computed attributes may appear in ``plan`` only as ``None`` (unknown);
        they are dropped from the returned mapping.
        """
        known = {attr.name: attr for attr in self.attributes}
        cleaned: Dict[str, Any] = {}
        for key, value in dict(plan or {}).items():
            attr = known.get(key)
            if attr is None:
                raise ValidationError(f"Unsupported attribute '{key}'.", attribute=key)
            if not attr.settable:
                if value is not None:
                    raise ValidationError(
                        f"Attribute '{key}' is computed and cannot be set.",
                        attribute=key,
                    )
                continue
            cleaned[key] = value
        for name in self.names(AttributeKind.REQUIRED):
            if cleaned.get(name) is None:
                raise ValidationError(f"Missing required attribute '{name}'.", attribute=name)
        return cleaned


__all__ = ["Attribute", "AttributeKind", "ResourceSchema"]
