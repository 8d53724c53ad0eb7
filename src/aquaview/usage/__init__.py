"""
aquaview.usage — read-only transforms over the bundled usage CSVs.

## Responsibilities
- Parse Current/Forecast/Anomaly CSVs into typed Polars frames.
- Provide the filters and aggregations behind the metrics pages (device filter,
  time windows, daily totals, anomalies grouped by date).
- Create deterministic demo datasets when none are bundled.

## Notes
- Forecast and anomaly values are pre-labelled in the data; nothing here predicts
  or detects anything.
- Never writes to the store; the only writer is create_demo_datasets.
"""

from __future__ import annotations

from .datasets import (
    DEVICES,
    AnomalyGroup,
    aggregate_by_day,
    device_label,
    filter_dates,
    filter_device,
    filter_window,
    forecast_window,
    group_anomalies_by_date,
    load_usage_csv,
    total_volume,
    trailing_window,
)
from .demo import create_demo_datasets

__all__ = [
    "DEVICES",
    "AnomalyGroup",
    "aggregate_by_day",
    "device_label",
    "filter_dates",
    "filter_device",
    "filter_window",
    "forecast_window",
    "group_anomalies_by_date",
    "load_usage_csv",
    "total_volume",
    "trailing_window",
    "create_demo_datasets",
]
