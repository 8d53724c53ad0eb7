"""
Header (global controls) for the water dashboard.

This module renders the top-of-page controls, including:
- Title and the data directory caption with its last-updated age.
- Demo dataset creation when the data directory has no CSVs.
- Cache preferences panel and the resulting CacheConfig used by data loaders.

Notes:
    - Avoids performing heavy IO directly; dataset loading happens in app.data.
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from app.data import CacheConfig, ensure_datasets
from aquaview.io.config import Settings

from .helpers import humanize_ago


def render_header(*, settings: Settings) -> CacheConfig:
    """Render the global header and return the cache config for loaders.

    Args:
        settings (Settings): Resolved settings (data_dir, cache_ttl).

    Returns:
        CacheConfig: Cache configuration for app.data loaders.

    Notes:
        - When the data directory lacks any of the three CSVs, deterministic demo
          datasets are written there and a success note is shown.
    """
    st.markdown("### 💧 Household Water Dashboard")

    if "cache_ttl" not in st.session_state:
        st.session_state["cache_ttl"] = int(settings.cache_ttl)
    if "cache_persist" not in st.session_state:
        st.session_state["cache_persist"] = False

    try:
        if ensure_datasets(settings.data_dir):
            st.success(f"No usage data found. Created demo datasets in {settings.data_dir}")
    except OSError as e:  # pragma: no cover
        st.error(f"Failed to create demo datasets: {e}")

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        try:
            mtime = Path(settings.data_dir).stat().st_mtime
            st.caption(f"Data: {settings.data_dir} (updated {humanize_ago(mtime)})")
        except OSError:
            st.caption(f"Data: {settings.data_dir}")
    with c2:
        with st.expander("Cache", expanded=False):
            ttl = st.number_input(
                "Cache TTL (seconds)",
                min_value=0,
                value=int(st.session_state["cache_ttl"]),
                step=60,
                help="0 disables TTL",
                key="cache_ttl_header",
            )
            persist = st.checkbox(
                "Persist to disk",
                value=bool(st.session_state["cache_persist"]),
                key="cache_persist_header",
            )
            st.session_state["cache_ttl"] = int(ttl)
            st.session_state["cache_persist"] = bool(persist)
            if st.button("Refresh data"):
                st.cache_data.clear()
                st.rerun()

    ttl_val = int(st.session_state["cache_ttl"])
    return CacheConfig(
        ttl=ttl_val if ttl_val > 0 else None,
        persist=bool(st.session_state["cache_persist"]),
    )
