"""
Shared UI helper utilities for the water dashboard.

This module centralizes small cross-cutting helpers (settings resolution, the
per-session fixture store, time and volume formatting, fixture icons) used by
multiple UI components. Keeping these here avoids circular imports and makes
per-page modules leaner.

Notes:
    - All functions include Google-style docstrings.
    - Nothing here calls Streamlit widgets; session state is passed in as a
      mapping so these helpers can be exercised without a running server.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from aquaview.core.schema import FixtureType
from aquaview.io.config import Settings
from aquaview.io.storage import open_storage
from aquaview.store.fixtures import FixtureStore

STORE_STATE_KEY = "fixture_store"

FIXTURE_ICONS: dict[FixtureType, str] = {
    FixtureType.KITCHEN_SINK: "🍽️",
    FixtureType.BATHROOM_SINK: "🚰",
    FixtureType.TOILET: "🚽",
    FixtureType.SHOWER: "🚿",
    FixtureType.DISHWASHER: "🧼",
    FixtureType.WASHING_MACHINE: "🧺",
}


def resolve_settings(*, data_dir: str | None = None, store_dir: str | None = None) -> Settings:
    """Load Settings (env > TOML > defaults) and apply explicit CLI overrides.

    Args:
        data_dir (str | None): Override for Settings.data_dir.
        store_dir (str | None): Override for Settings.store_dir.

    Returns:
        Settings: Validated settings.

    Raises:
        aquaview.io.errors.ConfigError: If the resulting settings are invalid.
    """
    s = Settings.load()
    if data_dir:
        s = replace(s, data_dir=data_dir)
    if store_dir:
        s = replace(s, store_dir=store_dir)
    return s.validated()


def get_fixture_store(state: MutableMapping[str, Any], settings: Settings) -> FixtureStore:
    """Return the session's FixtureStore, loading it on first use.

    The store is constructed once per session and kept in ``state`` so every
    rerun sees the same in-memory collection.

    Args:
        state (MutableMapping[str, Any]): Session state (st.session_state in the app).
        settings (Settings): Resolved settings used to open storage.

    Returns:
        FixtureStore: The session store.
    """
    store = state.get(STORE_STATE_KEY)
    if not isinstance(store, FixtureStore):
        store = FixtureStore.open(open_storage(settings))
        state[STORE_STATE_KEY] = store
    return store


def fixture_icon(fixture_type: FixtureType) -> str:
    """Emoji shown on a fixture card; a droplet for anything unmapped."""
    return FIXTURE_ICONS.get(fixture_type, "💧")


def format_litres(volume: float) -> str:
    """Format a volume as "1,234.50 L"."""
    return f"{volume:,.2f} L"


def humanize_ago(ts: float) -> str:
    """Convert a UNIX timestamp into a short humanized age string.

    Args:
        ts (float): UNIX timestamp (seconds since epoch).

    Returns:
        str: Humanized string like "32s ago", "5m ago", "2h ago", "3d ago",
        or "n/a" if conversion fails.
    """
    try:
        dt = datetime.fromtimestamp(ts, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return "n/a"
    delta = (datetime.now(tz=UTC) - dt).total_seconds()
    if delta < 60:
        return f"{int(delta)}s ago"
    if delta < 3600:
        return f"{int(delta // 60)}m ago"
    if delta < 86400:
        return f"{int(delta // 3600)}h ago"
    return f"{int(delta // 86400)}d ago"
