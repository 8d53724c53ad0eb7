"""
Fixture store: the authoritative in-memory fixture collection mirrored to durable storage.

Overview
- One FixtureStore per session, constructed with an injected Storage (read/write).
- load() reads the persisted JSON array once; bad data falls back to an empty
  collection and is recorded as a DeserializationError warning.
- add/update/delete re-serialize the full collection synchronously. The new
  collection only becomes visible after the write succeeded, so a PersistenceError
  leaves the store exactly as it was.

Invariants
- ids are unique and never change after creation.
- Collection order is insertion order.
- list() hands out an immutable tuple of frozen models.

Notes
- Single-writer semantics (no locking); concurrent sessions on the same storage key
  overwrite each other, last writer wins.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from aquaview.core.errors import NotFoundError, ValidationError
from aquaview.core.schema import Fixture, FixtureFields, parse_fields, parse_fixture
from aquaview.core.serde import json_dumps, json_loads
from aquaview.io.errors import DeserializationError, PersistenceError
from aquaview.io.storage import Storage

logger = logging.getLogger(__name__)

__all__ = [
    "FixtureStore",
    "decode_fixtures",
    "encode_fixtures",
]


def _new_id() -> str:
    return uuid.uuid4().hex


def encode_fixtures(fixtures: tuple[Fixture, ...] | list[Fixture]) -> str:
    """Serialize a collection to the persisted JSON array."""
    return json_dumps([f.to_record() for f in fixtures])


def decode_fixtures(text: str) -> list[Fixture]:
    """
    Parse the persisted JSON array into fixtures.

    Args:
        text (str): Persisted document.

    Returns:
        list[Fixture]: Fixtures in stored order.

    Raises:
        DeserializationError: If text is not JSON, not an array, contains an invalid
            record, or repeats an id.
    """
    try:
        data = json_loads(text)
    except (ValueError, RecursionError) as exc:
        raise DeserializationError(f"persisted fixtures are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DeserializationError(
            f"persisted fixtures must be a JSON array, got {type(data).__name__}"
        )

    out: list[Fixture] = []
    seen: set[str] = set()
    for idx, record in enumerate(data):
        try:
            fixture = parse_fixture(record)
        except ValidationError as exc:
            raise DeserializationError(f"invalid fixture record at index {idx}: {exc}") from exc
        if fixture.id in seen:
            raise DeserializationError(f"duplicate fixture id {fixture.id!r} at index {idx}")
        seen.add(fixture.id)
        out.append(fixture)
    return out


class FixtureStore:
    """
    CRUD store for user-defined fixtures.

    Args:
        storage (Storage): Durable backend holding the JSON array.
        id_factory (Callable[[], str] | None): Id generator; defaults to uuid4 hex.

    Attributes:
        load_warnings (list[DeserializationError]): Non-fatal problems found by the
            last load(); the UI surfaces these as warnings.

    Examples:
        >>> from aquaview.io.storage import MemoryStorage
        >>> store = FixtureStore.open(MemoryStorage())
        >>> f = store.add({"name": "Sink", "type": "Kitchen Sink", "location": "Kitchen"})
        >>> [x.name for x in store.list()]
        ['Sink']
    """

    def __init__(self, storage: Storage, *, id_factory: Callable[[], str] | None = None) -> None:
        self._storage = storage
        self._id_factory = id_factory or _new_id
        self._fixtures: tuple[Fixture, ...] = ()
        self.load_warnings: list[DeserializationError] = []

    @classmethod
    def open(
        cls, storage: Storage, *, id_factory: Callable[[], str] | None = None
    ) -> FixtureStore:
        """Construct a store and load the persisted collection."""
        store = cls(storage, id_factory=id_factory)
        store.load()
        return store

    # ---------- Load ----------

    def load(self) -> tuple[Fixture, ...]:
        """
        Replace the in-memory collection with the persisted one.

        Returns:
            tuple[Fixture, ...]: The loaded collection (empty if nothing was persisted
            or the persisted data was unusable).

        Notes:
            Never raises for bad persisted data. The failure is logged and appended
            to load_warnings, and the collection is empty.
        """
        self.load_warnings = []
        try:
            text = self._storage.read()
            fixtures = decode_fixtures(text) if text is not None else []
        except DeserializationError as exc:
            logger.warning("Ignoring persisted fixtures: %s", exc)
            self.load_warnings.append(exc)
            fixtures = []
        self._fixtures = tuple(fixtures)
        logger.info("Loaded %d fixture(s)", len(self._fixtures))
        return self._fixtures

    # ---------- Reads ----------

    def list(self) -> tuple[Fixture, ...]:
        """Return the collection in insertion order."""
        return self._fixtures

    def get(self, fixture_id: str) -> Fixture:
        """
        Return the fixture with fixture_id.

        Raises:
            NotFoundError: If no fixture has that id.
        """
        for f in self._fixtures:
            if f.id == fixture_id:
                return f
        raise NotFoundError(fixture_id)

    def __len__(self) -> int:
        return len(self._fixtures)

    def __iter__(self) -> Iterator[Fixture]:
        return iter(self._fixtures)

    def __contains__(self, fixture_id: object) -> bool:
        return any(f.id == fixture_id for f in self._fixtures)

    # ---------- Mutations ----------

    def add(self, fields: FixtureFields | Mapping[str, Any]) -> Fixture:
        """
        Create a fixture with a fresh id and append it.

        Args:
            fields (FixtureFields | Mapping[str, Any]): name, type and location.

        Returns:
            Fixture: The created fixture.

        Raises:
            ValidationError: If a field is empty or the type is unknown.
            PersistenceError: If the write fails (the collection is unchanged).
        """
        payload = parse_fields(fields)
        fixture = Fixture(id=self._unique_id(), **payload.model_dump())
        self._commit((*self._fixtures, fixture))
        logger.info("Added fixture %s (%s)", fixture.id, fixture.type.value)
        return fixture

    def update(self, fixture_id: str, fields: FixtureFields | Mapping[str, Any]) -> Fixture:
        """
        Replace the fields of an existing fixture, keeping its id and position.

        Raises:
            NotFoundError: If no fixture has fixture_id.
            ValidationError: If a field is empty or the type is unknown.
            PersistenceError: If the write fails (the collection is unchanged).
        """
        idx = self._index_of(fixture_id)
        if idx is None:
            raise NotFoundError(fixture_id)
        payload = parse_fields(fields)
        updated = Fixture(id=fixture_id, **payload.model_dump())
        items = list(self._fixtures)
        items[idx] = updated
        self._commit(tuple(items))
        logger.info("Updated fixture %s", fixture_id)
        return updated

    def delete(self, fixture_id: str) -> bool:
        """
        Remove the fixture with fixture_id.

        Returns:
            bool: True if a fixture was removed; False if the id was absent (no write).

        Raises:
            PersistenceError: If the write fails (the collection is unchanged).
        """
        idx = self._index_of(fixture_id)
        if idx is None:
            return False
        self._commit(self._fixtures[:idx] + self._fixtures[idx + 1 :])
        logger.info("Deleted fixture %s", fixture_id)
        return True

    # ---------- Internals ----------

    def _index_of(self, fixture_id: str) -> int | None:
        for i, f in enumerate(self._fixtures):
            if f.id == fixture_id:
                return i
        return None

    def _unique_id(self) -> str:
        existing = {f.id for f in self._fixtures}
        while True:
            candidate = self._id_factory()
            if candidate and candidate not in existing:
                return candidate
            logger.debug("Regenerating colliding fixture id %r", candidate)

    def _commit(self, fixtures: tuple[Fixture, ...]) -> None:
        try:
            self._storage.write(encode_fixtures(fixtures))
        except OSError as exc:
            raise PersistenceError(f"failed to persist fixtures: {exc}") from exc
        self._fixtures = fixtures
