from __future__ import annotations

import time

import pytest

from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.errors import ValidationError
from demoapp_provider.domain.models import Item, ItemDraft, validate_json
from demoapp_provider.domain.schema import Attribute, AttributeKind, ResourceSchema


def test_item_from_payload_stringifies_numeric_id() -> None:
    assert Item.from_payload({"id": 42, "name": "a", "description": None}) == Item("42", "a", "")
    assert Item.from_payload({"id": 3.0, "name": "a"}).id == "3"


@pytest.mark.parametrize("payload", [{}, {"id": None}, {"id": ""}, {"id": True}, {"id": 1.5}])
def test_item_from_payload_requires_usable_id(payload: dict) -> None:
    with pytest.raises(ValueError):
        Item.from_payload(payload)


def test_item_draft_validation() -> None:
    assert ItemDraft("n").to_payload() == {"name": "n", "description": ""}
    with pytest.raises(ValidationError):
        ItemDraft("")
    with pytest.raises(ValidationError):
        ItemDraft("n", description=5)  # type: ignore[arg-type]


def test_validate_json_returns_input_unchanged() -> None:
    text = '{ "b" : 1, "a": [true, null] }'
    assert validate_json(text) is text
    assert validate_json("[]") == "[]"
    assert validate_json('"just a string"') == '"just a string"'


@pytest.mark.parametrize("text", ["{not json", "", "Infinity", None, b"{}"])
def test_validate_json_rejects(text: object) -> None:
    with pytest.raises(ValidationError) as info:
        validate_json(text)
    assert info.value.attribute == "data"


def test_schema_validate_plan() -> None:
    schema = ResourceSchema(
        description="demo",
        attributes=(
            Attribute("id", AttributeKind.COMPUTED),
            Attribute("name", AttributeKind.REQUIRED),
            Attribute("note", AttributeKind.OPTIONAL),
        ),
    )

    assert schema.validate_plan({"name": "n", "id": None}) == {"name": "n"}
    assert schema.names(AttributeKind.REQUIRED) == ("name",)
    with pytest.raises(ValidationError):
        schema.validate_plan({"note": "x"})
    with pytest.raises(ValidationError):
        schema.validate_plan({"name": "n", "id": "1"})
    with pytest.raises(KeyError):
        schema.attribute("missing")


def test_operation_context_cancel_and_deadline() -> None:
    ctx = OperationContext.background()
    assert ctx.cancelled is False
    assert ctx.remaining() is None

    ctx.cancel()
    assert ctx.cancelled is True
    assert ctx.reason() == "operation cancelled"

    expired = OperationContext(deadline=time.monotonic() - 1)
    assert expired.cancelled is True
    assert expired.reason() == "operation deadline exceeded"
