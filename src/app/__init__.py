from __future__ import annotations

"""
Top-level Streamlit app package.

This package hosts the interactive water-usage dashboard (Streamlit) decoupled
from the aquaview.* library modules. The fixture store and dataset transforms live
in aquaview; the Streamlit UI shell and app-specific helpers live here.

CLI entrypoint (configured in pyproject.toml):
    aquaview-app = app.main:main
"""
