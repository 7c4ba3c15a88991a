"""Domain package exports for value objects, schemas and errors."""

from .context import OperationContext
from .errors import ConfigurationError, ValidationError
from .models import DISPLAY_ID, Display, Item, ItemDraft, NotFound, validate_json
from .schema import Attribute, AttributeKind, ResourceSchema

__all__ = [
    "Attribute",
    "AttributeKind",
    "ConfigurationError",
    "DISPLAY_ID",
    "Display",
    "Item",
    "ItemDraft",
    "NotFound",
    "OperationContext",
    "ResourceSchema",
    "ValidationError",
    "validate_json",
]
