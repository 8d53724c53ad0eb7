from __future__ import annotations

import time
from pathlib import Path

from aquaview.core.schema import FixtureType
from aquaview.store.fixtures import FixtureStore
from app.ui.helpers import (
    STORE_STATE_KEY,
    fixture_icon,
    format_litres,
    get_fixture_store,
    humanize_ago,
    resolve_settings,
)


def test_humanize_ago_smoke() -> None:
    now = time.time()
    assert "ago" in humanize_ago(now - 2)
    assert humanize_ago(now - 7200) == "2h ago"


def test_format_litres_and_icons() -> None:
    assert format_litres(1234.5) == "1,234.50 L"
    assert all(fixture_icon(t) for t in FixtureType)


def test_resolve_settings_applies_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AQUAVIEW_DATA_DIR", "env_data")
    s = resolve_settings(store_dir="cli_store")
    assert s.store_dir == "cli_store"
    assert s.data_dir == "env_data"
    assert resolve_settings(data_dir="cli_data").data_dir == "cli_data"


def test_get_fixture_store_is_created_once_per_session(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = resolve_settings(store_dir=str(tmp_path / "store"))
    state: dict = {}

    store = get_fixture_store(state, settings)
    store.add({"name": "Sink", "type": "Kitchen Sink", "location": "Kitchen"})

    assert isinstance(state[STORE_STATE_KEY], FixtureStore)
    assert get_fixture_store(state, settings) is store

    # A fresh session loads what the first one persisted
    other = get_fixture_store({}, settings)
    assert other is not store
    assert other.list() == store.list()
