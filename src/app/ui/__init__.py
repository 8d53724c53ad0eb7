"""
Water dashboard UI package.

This package contains the decomposed Streamlit UI. It exposes high-level
orchestration and focused modules for separate concerns.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - header: Global header (demo data bootstrap, cache preferences).
    - metrics: Forecast, Current Use and Anomaly tabs.
    - fixtures: Fixture management page (form, cards, delete confirmation).
    - helpers: Small cross-cutting helpers (settings, session store, formatting).

Usage:
    from app.ui import streamlit_app
    streamlit_app(data_dir="data", store_dir=".aquaview")
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_header

__all__ = [
    "streamlit_app",
    "render_header",
]
