from __future__ import annotations

import pytest

from aquaview.core.errors import NotFoundError, ValidationError
from aquaview.io.errors import PersistenceError
from aquaview.io.storage import MemoryStorage
from aquaview.store.fixtures import FixtureStore
from app.ui.fixtures import (
    CONFIRM_DELETE_KEY,
    EDITING_KEY,
    FORM_NONCE_KEY,
    INSTRUCTIONS,
    confirm_delete,
    reset_form,
    submit_fixture,
)


@pytest.fixture
def store() -> FixtureStore:
    return FixtureStore.open(MemoryStorage())


def test_submit_adds_when_not_editing(store: FixtureStore) -> None:
    fx = submit_fixture(
        store, editing_id=None, name="Sink", fixture_type="Kitchen Sink", location="Kitchen"
    )
    assert store.list() == (fx,)


def test_submit_updates_when_editing(store: FixtureStore) -> None:
    fx = store.add({"name": "Sink", "type": "Kitchen Sink", "location": "Kitchen"})
    updated = submit_fixture(
        store, editing_id=fx.id, name="Sink 2", fixture_type="Kitchen Sink", location="Pantry"
    )
    assert updated.id == fx.id
    assert store.list() == (updated,)


def test_submit_without_type_is_validation_error(store: FixtureStore) -> None:
    with pytest.raises(ValidationError):
        submit_fixture(store, editing_id=None, name="Sink", fixture_type=None, location="Kitchen")
    assert store.list() == ()


def test_submit_for_vanished_fixture_is_not_found(store: FixtureStore) -> None:
    with pytest.raises(NotFoundError):
        submit_fixture(
            store, editing_id="gone", name="Sink", fixture_type="Toilet", location="Hall"
        )


def test_submit_surfaces_persistence_error() -> None:
    store = FixtureStore.open(MemoryStorage(fail_writes=True))
    with pytest.raises(PersistenceError):
        submit_fixture(store, editing_id=None, name="S", fixture_type="Shower", location="Bath")
    assert store.list() == ()


def test_confirm_delete_clears_related_state(store: FixtureStore) -> None:
    fx = store.add({"name": "Shower", "type": "Shower", "location": "Bath"})
    state = {CONFIRM_DELETE_KEY: fx.id, EDITING_KEY: fx.id}
    assert confirm_delete(store, state, fx.id) is True
    assert store.list() == ()
    assert state == {CONFIRM_DELETE_KEY: None, EDITING_KEY: None}
    assert confirm_delete(store, state, fx.id) is False


def test_instructions_name_every_fixture_type() -> None:
    assert "Washing Machine" in INSTRUCTIONS[1]
    assert "Kitchen Sink" in INSTRUCTIONS[1]


def test_rejected_submit_keeps_form_and_save_resets_it(store: FixtureStore) -> None:
    state = {EDITING_KEY: None, FORM_NONCE_KEY: 0}
    with pytest.raises(ValidationError):
        submit_fixture(store, editing_id=None, name="", fixture_type="Toilet", location="Hall")
    # Nothing touched the form state, so the typed values stay in place
    assert state == {EDITING_KEY: None, FORM_NONCE_KEY: 0}

    fx = submit_fixture(
        store, editing_id=None, name="Toilet", fixture_type="Toilet", location="Hall"
    )
    state[EDITING_KEY] = fx.id
    reset_form(state)
    assert state == {EDITING_KEY: None, FORM_NONCE_KEY: 1}

    fresh: dict = {}
    reset_form(fresh)
    assert fresh == {EDITING_KEY: None, FORM_NONCE_KEY: 1}
