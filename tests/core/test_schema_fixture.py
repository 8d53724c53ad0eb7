from __future__ import annotations

import pytest

from aquaview.core.errors import NotFoundError, ValidationError
from aquaview.core.schema import (
    FIXTURE_TYPES,
    Fixture,
    FixtureFields,
    FixtureType,
    fixture_type_from_value,
    parse_fields,
    parse_fixture,
)


def test_fixture_types_are_the_closed_dropdown_set() -> None:
    assert FIXTURE_TYPES == (
        "Kitchen Sink",
        "Bathroom Sink",
        "Toilet",
        "Shower",
        "Dishwasher",
        "Washing Machine",
    )


def test_parse_fields_strips_and_normalizes_type() -> None:
    f = parse_fields({"name": "  Sink ", "type": "Kitchen Sink", "location": " Kitchen"})
    assert f.name == "Sink"
    assert f.location == "Kitchen"
    assert f.type is FixtureType.KITCHEN_SINK


@pytest.mark.parametrize(
    "payload, needle",
    [
        ({"name": "", "type": "Toilet", "location": "Hall"}, "name"),
        ({"name": "T", "type": "Toilet", "location": "   "}, "location"),
        ({"name": "T", "type": "", "location": "Hall"}, "type"),
        ({"name": "T", "type": "Bathtub", "location": "Hall"}, "unknown fixture type"),
        ({"name": "T", "location": "Hall"}, "type"),
        ({"name": "bad\udcff", "type": "Toilet", "location": "Hall"}, "name"),
    ],
)
def test_parse_fields_rejects_empty_or_unknown(payload: dict, needle: str) -> None:
    with pytest.raises(ValidationError) as ei:
        parse_fields(payload)
    assert needle in str(ei.value)


def test_parse_fields_rejects_id_from_form() -> None:
    with pytest.raises(ValidationError) as ei:
        parse_fields({"id": "x", "name": "T", "type": "Toilet", "location": "Hall"})
    assert "id" in str(ei.value)


def test_parse_fields_accepts_model_and_fixture() -> None:
    fields = FixtureFields(name="S", type="Shower", location="Bath")
    assert parse_fields(fields) is fields
    fx = Fixture(id="a1", name="S", type="Shower", location="Bath")
    assert parse_fields(fx) == fields


def test_fixture_record_keeps_field_order_and_display_type() -> None:
    fx = Fixture(id="a1", name="Washer", type=FixtureType.WASHING_MACHINE, location="Garage")
    rec = fx.to_record()
    assert list(rec) == ["id", "name", "type", "location"]
    assert rec["type"] == "Washing Machine"
    assert parse_fixture(rec) == fx


def test_fixture_is_frozen() -> None:
    fx = Fixture(id="a1", name="S", type="Shower", location="Bath")
    with pytest.raises(Exception):
        fx.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize("record", [[1, 2], "x", {"id": "", "name": "n", "type": "Toilet", "location": "l"}])
def test_parse_fixture_rejects_bad_records(record: object) -> None:
    with pytest.raises(ValidationError):
        parse_fixture(record)


def test_fixture_type_from_value_accepts_members() -> None:
    assert fixture_type_from_value(FixtureType.TOILET) is FixtureType.TOILET
    assert fixture_type_from_value(" Toilet ") is FixtureType.TOILET


def test_not_found_error_carries_id() -> None:
    err = NotFoundError("abc")
    assert err.fixture_id == "abc"
    assert "abc" in str(err)
    assert isinstance(err, LookupError)
