"""
Pydantic v2 models for fixtures and the form payload used to create or edit them.

Responsibilities
- Define the closed FixtureType enumeration shown in the fixture form dropdown.
- Define FixtureFields (the mutable {name, type, location} payload) and Fixture
  (a FixtureFields plus an immutable id).
- Convert pydantic validation failures into aquaview.core.errors.ValidationError so
  callers only handle domain errors.

Style
- Zero-IO (stdlib + pydantic only).
- Models are frozen; the store replaces records instead of mutating them.
- Enum-valued fields serialize by display value ("Kitchen Sink"), matching the
  persisted document format.

References
- errors: src/aquaview/core/errors.py (ValidationError)
- store: src/aquaview/store/fixtures.py (the only writer of Fixture ids)
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

__all__ = [
    "FixtureType",
    "FIXTURE_TYPES",
    "fixture_type_from_value",
    "FixtureFields",
    "Fixture",
    "parse_fields",
    "parse_fixture",
]


class FixtureType(Enum):
    """Closed set of household fixture types."""

    KITCHEN_SINK = "Kitchen Sink"
    BATHROOM_SINK = "Bathroom Sink"
    TOILET = "Toilet"
    SHOWER = "Shower"
    DISHWASHER = "Dishwasher"
    WASHING_MACHINE = "Washing Machine"


# Display values in dropdown order.
FIXTURE_TYPES: tuple[str, ...] = tuple(t.value for t in FixtureType)


def fixture_type_from_value(s: Any) -> FixtureType:
    """
    Parse a display string (or FixtureType) into a FixtureType.

    Args:
        s (Any): Display value such as "Kitchen Sink", or a FixtureType member.

    Returns:
        FixtureType: Parsed fixture type.

    Raises:
        ValidationError: If s is empty or not one of FIXTURE_TYPES.
    """
    if isinstance(s, FixtureType):
        return s
    if not isinstance(s, str) or not s.strip():
        raise ValidationError("type must be non-empty")
    try:
        return FixtureType(s.strip())
    except ValueError:
        raise ValidationError(
            f"unknown fixture type {s!r} (expected one of {list(FIXTURE_TYPES)!r})"
        ) from None


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    text = value.strip()
    if not text:
        raise ValidationError(f"{field} must be non-empty")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(f"{field} contains characters that cannot be stored") from None
    return text


class FixtureFields(BaseModel):
    """
    Mutable fields of a fixture, as submitted by the create/edit form.

    Attributes:
        name (str): Free-text label, e.g. "Master Bathroom Sink". Stripped, non-empty.
        type (FixtureType): One of FIXTURE_TYPES.
        location (str): Free-text location, e.g. "Second Floor". Stripped, non-empty.

    Notes:
        extra="forbid" rejects an ``id`` key, so ids cannot be set from the form.

    Examples:
        >>> from aquaview.core.schema import FixtureFields
        >>> FixtureFields(name="Sink", type="Kitchen Sink", location="Kitchen").type.value
        'Kitchen Sink'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    type: FixtureType
    location: str

    @field_validator("name", "location", mode="before")
    @classmethod
    def _strip_text(cls, v: Any, info: Any) -> str:
        return _require_text(v, info.field_name)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> FixtureType:
        return fixture_type_from_value(v)


class Fixture(FixtureFields):
    """
    A user-declared water fixture.

    Attributes:
        id (str): Opaque identifier assigned by the store at creation; never changes.

    Notes:
        ``model_dump(mode="json")`` yields the persisted record
        ``{"id", "name", "type", "location"}`` with type as its display value.
    """

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v: Any) -> str:
        return _require_text(v, "id")

    @property
    def fields(self) -> FixtureFields:
        """The mutable part of this fixture."""
        return FixtureFields(name=self.name, type=self.type, location=self.location)

    def to_record(self) -> dict[str, str]:
        """Return the persisted record with keys in id, name, type, location order."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "location": self.location,
        }


def _first_domain_error(exc: PydanticValidationError) -> ValidationError:
    # Validators raise ValidationError (a ValueError); pydantic keeps it in ctx.
    for err in exc.errors():
        cause = (err.get("ctx") or {}).get("error")
        if isinstance(cause, ValidationError):
            return cause
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ())) or "payload"
    return ValidationError(f"{loc}: {first.get('msg', 'invalid value')}")


def parse_fields(payload: FixtureFields | Mapping[str, Any]) -> FixtureFields:
    """
    Coerce a form payload into FixtureFields.

    Args:
        payload (FixtureFields | Mapping[str, Any]): Model instance or mapping with
            name/type/location keys.

    Returns:
        FixtureFields: Validated payload.

    Raises:
        ValidationError: If a field is missing or empty, the type is unknown, or
            unexpected keys (including ``id``) are present.
    """
    if isinstance(payload, FixtureFields) and not isinstance(payload, Fixture):
        return payload
    if isinstance(payload, Fixture):
        return payload.fields
    if not isinstance(payload, Mapping):
        raise ValidationError(f"expected a mapping of fixture fields, got {type(payload).__name__}")
    try:
        return FixtureFields.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise _first_domain_error(exc) from exc


def parse_fixture(record: Any) -> Fixture:
    """
    Validate a persisted record into a Fixture.

    Args:
        record (Any): Decoded JSON value expected to be an object with string
            fields id, name, type, location.

    Returns:
        Fixture: Validated fixture.

    Raises:
        ValidationError: If the record is not an object or any field is invalid.
    """
    if not isinstance(record, Mapping):
        raise ValidationError(f"fixture record must be an object, got {type(record).__name__}")
    try:
        return Fixture.model_validate(dict(record))
    except PydanticValidationError as exc:
        raise _first_domain_error(exc) from exc
