"""
Core defaults shared by storage, configuration, and the dashboard.

This module is zero-IO and uses only the Python standard library.

Notes:
    - aquaview.io.config.Settings consumes these as its defaults; override them
      via environment or TOML rather than editing here.
    - The persisted document format is keyed by STORAGE_KEY and has no version tag.
"""

from __future__ import annotations

__all__ = [
    "STORAGE_KEY",
    "STORE_DIR",
    "DATA_DIR",
    "CACHE_TTL",
    "CURRENT_CSV",
    "FORECAST_CSV",
    "ANOMALY_CSV",
]

# Key under which the fixture collection is persisted (file stem for file storage).
STORAGE_KEY: str = "fixtures"

# Directory holding persisted documents.
STORE_DIR: str = ".aquaview"

# Directory holding the bundled usage CSVs.
DATA_DIR: str = "data"

# Default Streamlit cache TTL for dataset loaders, in seconds.
CACHE_TTL: int = 600

CURRENT_CSV: str = "Current.csv"
FORECAST_CSV: str = "Forecast.csv"
ANOMALY_CSV: str = "Anomaly.csv"
