from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
import streamlit as st

from aquaview.core.constants import ANOMALY_CSV, CURRENT_CSV, FORECAST_CSV
from aquaview.usage import create_demo_datasets, load_usage_csv

__all__ = [
    "CacheConfig",
    "datasets_present",
    "ensure_datasets",
    "load_current",
    "load_forecast",
    "load_anomaly",
]

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. We build and memoize decorated callables per (name, ttl, persist) so the
    app can switch these at runtime while still benefiting from caching.
    """

    ttl: int | None = None
    persist: bool = False


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Bootstrap ----------


_DATASETS = (CURRENT_CSV, FORECAST_CSV, ANOMALY_CSV)


def datasets_present(data_dir: str) -> bool:
    base = Path(data_dir)
    return all((base / name).exists() for name in _DATASETS)


def ensure_datasets(data_dir: str) -> bool:
    """Create demo CSVs when the data directory holds none of the datasets.

    A partially populated directory is left alone; the missing file surfaces
    as a load error instead of replacing the user's data.

    Returns:
        bool: True if demo datasets were written.
    """
    base = Path(data_dir)
    if any((base / name).exists() for name in _DATASETS):
        return False
    create_demo_datasets(data_dir)
    return True


# ---------- Loaders (internal implementations) ----------


def _load_current_impl(data_dir: str) -> pl.DataFrame:
    return load_usage_csv(Path(data_dir) / CURRENT_CSV)


def _load_forecast_impl(data_dir: str) -> pl.DataFrame:
    return load_usage_csv(Path(data_dir) / FORECAST_CSV)


def _load_anomaly_impl(data_dir: str) -> pl.DataFrame:
    return load_usage_csv(Path(data_dir) / ANOMALY_CSV, anomaly=True)


# ---------- Public loader APIs (dispatch to cached implementations) ----------


def load_current(data_dir: str, *, cfg: CacheConfig = CacheConfig()) -> pl.DataFrame:
    fn = _get_cached("load_current", cfg, _load_current_impl)
    return fn(data_dir)  # type: ignore[no-any-return]


def load_forecast(data_dir: str, *, cfg: CacheConfig = CacheConfig()) -> pl.DataFrame:
    fn = _get_cached("load_forecast", cfg, _load_forecast_impl)
    return fn(data_dir)  # type: ignore[no-any-return]


def load_anomaly(data_dir: str, *, cfg: CacheConfig = CacheConfig()) -> pl.DataFrame:
    """Return the anomaly dataset including non-anomalous rows (is_anomaly column)."""
    fn = _get_cached("load_anomaly", cfg, _load_anomaly_impl)
    return fn(data_dir)  # type: ignore[no-any-return]
