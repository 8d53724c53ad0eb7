"""
Streamlit application orchestrator for the water dashboard.

This module composes the global header and all page tabs while delegating
supporting concerns to focused modules under app.ui.* (header, metrics,
fixtures, helpers).

Responsibilities:
    - Configure Streamlit page.
    - Resolve settings and the per-session FixtureStore.
    - Render global header (demo data bootstrap, cache prefs).
    - Load usage datasets via app.data with configurable caching.
    - Mount tab content (Forecast, Current Use, Anomaly, Fixtures).
"""

from __future__ import annotations

from collections.abc import Callable

import polars as pl
import streamlit as st

from app.data import CacheConfig, load_anomaly, load_current, load_forecast
from aquaview.io.errors import ConfigError, UsageDataError

from .fixtures import render_fixtures_page
from .header import render_header
from .helpers import get_fixture_store, resolve_settings
from .metrics import render_anomaly, render_current, render_forecast


def _load(
    loader: Callable[..., pl.DataFrame], name: str, data_dir: str, cfg: CacheConfig
) -> pl.DataFrame | None:
    try:
        with st.spinner(f"Loading {name} ..."):
            return loader(data_dir, cfg=cfg)
    except (FileNotFoundError, UsageDataError) as e:
        st.error(str(e))
        return None


def streamlit_app(data_dir: str | None = None, store_dir: str | None = None) -> None:
    """Render the water dashboard.

    Args:
        data_dir (str | None): Override for the CSV directory.
        store_dir (str | None): Override for the fixtures storage directory.

    Returns:
        None
    """
    st.set_page_config(page_title="Water Dashboard", page_icon="💧", layout="wide")

    try:
        settings = resolve_settings(data_dir=data_dir, store_dir=store_dir)
    except ConfigError as e:
        st.error(f"Invalid configuration: {e}")
        return

    cache_cfg = render_header(settings=settings)
    store = get_fixture_store(st.session_state, settings)

    tab_forecast, tab_current, tab_anomaly, tab_fixtures = st.tabs(
        ["Forecast", "Current Use", "Anomaly", "Fixtures"]
    )

    with tab_forecast:
        df = _load(load_forecast, "forecast", settings.data_dir, cache_cfg)
        if df is not None:
            render_forecast(df)

    with tab_current:
        df = _load(load_current, "current usage", settings.data_dir, cache_cfg)
        if df is not None:
            render_current(df)

    with tab_anomaly:
        df = _load(load_anomaly, "anomalies", settings.data_dir, cache_cfg)
        if df is not None:
            render_anomaly(df)

    with tab_fixtures:
        render_fixtures_page(store)
