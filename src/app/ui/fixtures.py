"""
Fixtures page: add/edit form, fixture cards, and delete confirmation.

The page talks to the session FixtureStore only through its public contract
(list/get/add/update/delete). Domain and storage errors are shown inline and
leave the page state untouched so the user can correct and resubmit.

Session keys:
    - fixtures_editing_id: id of the fixture loaded into the form, or None.
    - fixtures_confirm_delete_id: id awaiting delete confirmation, or None.
    - fixtures_form_nonce: bumped after a save or cancel so the form renders empty.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

import streamlit as st

from aquaview.core.errors import NotFoundError, ValidationError
from aquaview.core.schema import FIXTURE_TYPES, Fixture
from aquaview.io.errors import PersistenceError
from aquaview.store.fixtures import FixtureStore

from .helpers import fixture_icon

EDITING_KEY = "fixtures_editing_id"
CONFIRM_DELETE_KEY = "fixtures_confirm_delete_id"
FORM_NONCE_KEY = "fixtures_form_nonce"

INSTRUCTIONS = (
    'Click "Add Fixture" to open the fixture form.',
    "Select the fixture type from the dropdown ("
    + ", ".join(FIXTURE_TYPES[:-1])
    + f", or {FIXTURE_TYPES[-1]}).",
    "Enter a unique name for your fixture and specify its location in your home.",
    'Click "Save Fixture" to add it to your dashboard. You can add as many fixtures as needed.',
)


def submit_fixture(
    store: FixtureStore,
    *,
    editing_id: str | None,
    name: str,
    fixture_type: str | None,
    location: str,
) -> Fixture:
    """Apply a form submission: update when editing_id is set, add otherwise.

    Raises:
        ValidationError: If a field is empty or the type is unknown.
        NotFoundError: If editing_id no longer exists.
        PersistenceError: If the store could not persist the change.
    """
    payload = {"name": name, "type": fixture_type or "", "location": location}
    if editing_id is None:
        return store.add(payload)
    return store.update(editing_id, payload)


def confirm_delete(store: FixtureStore, state: MutableMapping[str, Any], fixture_id: str) -> bool:
    """Delete after confirmation and clear any form/confirmation state tied to the id.

    Returns:
        bool: True if a fixture was removed.
    """
    removed = store.delete(fixture_id)
    if state.get(CONFIRM_DELETE_KEY) == fixture_id:
        state[CONFIRM_DELETE_KEY] = None
    if state.get(EDITING_KEY) == fixture_id:
        state[EDITING_KEY] = None
    return removed


def reset_form(state: MutableMapping[str, Any]) -> None:
    """Leave edit mode and give the form fresh, empty widgets on the next run."""
    state[EDITING_KEY] = None
    state[FORM_NONCE_KEY] = int(state.get(FORM_NONCE_KEY, 0)) + 1


def _render_form(store: FixtureStore) -> None:
    editing_id = st.session_state.get(EDITING_KEY)
    current: Fixture | None = None
    if editing_id is not None:
        try:
            current = store.get(editing_id)
        except NotFoundError:
            st.session_state[EDITING_KEY] = None
            editing_id = None

    title = "Edit Fixture" if current else "Add New Fixture"
    # Inputs survive a rejected submit; reset_form clears them after a save.
    nonce = st.session_state.get(FORM_NONCE_KEY, 0)
    with st.form(f"fixture_form_{nonce}_{editing_id or 'new'}", clear_on_submit=False):
        st.markdown(f"#### {title}")
        fixture_type = st.selectbox(
            "Fixture Type",
            options=list(FIXTURE_TYPES),
            index=FIXTURE_TYPES.index(current.type.value) if current else None,
            placeholder="Select a type...",
        )
        name = st.text_input(
            "Fixture Name",
            value=current.name if current else "",
            placeholder="e.g., Master Bathroom Sink",
        )
        location = st.text_input(
            "Location",
            value=current.location if current else "",
            placeholder="e.g., Second Floor",
        )
        c_save, c_cancel = st.columns(2)
        saved = c_save.form_submit_button("Save Fixture", type="primary")
        cancelled = c_cancel.form_submit_button("Cancel")

    if cancelled:
        reset_form(st.session_state)
        st.rerun()
    if not saved:
        return
    try:
        fixture = submit_fixture(
            store,
            editing_id=editing_id,
            name=name,
            fixture_type=fixture_type,
            location=location,
        )
    except ValidationError as e:
        st.error(f"Please fix the form: {e}")
        return
    except NotFoundError:
        st.error("This fixture no longer exists.")
        st.session_state[EDITING_KEY] = None
        return
    except PersistenceError as e:
        st.error(f"Could not save fixtures; your change was not applied. {e}")
        return
    reset_form(st.session_state)
    st.toast(f"Saved {fixture.name}")
    st.rerun()


def _render_card(store: FixtureStore, fixture: Fixture) -> None:
    with st.container(border=True):
        if st.session_state.get(CONFIRM_DELETE_KEY) == fixture.id:
            st.write("Are you sure you want to delete this fixture?")
            c_del, c_cancel = st.columns(2)
            if c_del.button("Delete", key=f"del_yes_{fixture.id}", type="primary"):
                try:
                    confirm_delete(store, st.session_state, fixture.id)
                except PersistenceError as e:
                    st.error(f"Could not delete fixture: {e}")
                    return
                st.rerun()
            if c_cancel.button("Cancel", key=f"del_no_{fixture.id}"):
                st.session_state[CONFIRM_DELETE_KEY] = None
                st.rerun()
            return

        head, actions = st.columns([0.7, 0.3])
        head.markdown(f"### {fixture_icon(fixture.type)} {fixture.name}\n{fixture.type.value}")
        if actions.button("✏️", key=f"edit_{fixture.id}", help="Edit fixture"):
            st.session_state[EDITING_KEY] = fixture.id
            st.rerun()
        if actions.button("🗑️", key=f"delete_{fixture.id}", help="Delete fixture"):
            st.session_state[CONFIRM_DELETE_KEY] = fixture.id
            st.rerun()
        st.caption(f"📍 {fixture.location}")


def render_fixtures_page(store: FixtureStore) -> None:
    """Render the fixture management page for the session store."""
    st.session_state.setdefault(EDITING_KEY, None)
    st.session_state.setdefault(CONFIRM_DELETE_KEY, None)
    st.session_state.setdefault(FORM_NONCE_KEY, 0)

    st.subheader("Manage Your Fixtures")
    for warn in store.load_warnings:
        st.warning(f"Saved fixtures could not be read and were ignored: {warn}")

    with st.expander("How to Manage Your Fixtures", expanded=not len(store)):
        for i, step in enumerate(INSTRUCTIONS, start=1):
            st.markdown(f"{i}. {step}")

    _render_form(store)

    fixtures = store.list()
    if not fixtures:
        st.caption("No fixtures yet.")
        return
    cols = st.columns(3)
    for i, fixture in enumerate(fixtures):
        with cols[i % 3]:
            _render_card(store, fixture)
