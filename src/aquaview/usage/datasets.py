"""
Usage dataset parsing, filtering and aggregation (Polars-first).

CSV contract
- Header includes "Timestamp", "Device Name", "Volume Used (L)".
- The anomaly dataset also has "Anomaly"; the string "1" marks an anomalous row.

Normalized frame
- timestamp (Datetime), date (Date), device (Utf8), volume (Float64), and for
  anomaly data is_anomaly (Boolean).
- Rows whose timestamp or volume cannot be parsed are dropped.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Literal

import polars as pl

from aquaview.io.errors import UsageDataError

__all__ = [
    "DEVICES",
    "ForecastRange",
    "TrailingRange",
    "AnomalyGroup",
    "load_usage_csv",
    "device_label",
    "filter_device",
    "filter_window",
    "filter_dates",
    "forecast_window",
    "trailing_window",
    "aggregate_by_day",
    "total_volume",
    "group_anomalies_by_date",
]

DEVICES: tuple[str, ...] = (
    "all",
    "bathroom_sink",
    "bathroom_sink_2",
    "toilet",
    "toilet_2",
    "washing_machine",
    "dishwasher",
    "shower",
    "kitchen_sink",
)

ForecastRange = Literal["1week", "1month", "3months", "6months", "1year"]
TrailingRange = Literal["today", "1week", "1month", "3months", "6months", "1year"]

_MONTHS: dict[str, int] = {"1month": 1, "3months": 3, "6months": 6, "1year": 12}

_REQUIRED = ("Timestamp", "Device Name", "Volume Used (L)")


@dataclass(frozen=True)
class AnomalyGroup:
    """Anomalous readings that share a calendar date."""

    date: date
    rows: list[dict[str, object]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rows)


def load_usage_csv(path: str | Path, *, anomaly: bool = False) -> pl.DataFrame:
    """Parse a usage CSV into the normalized frame.

    Args:
        path (str | Path): CSV file.
        anomaly (bool): Require and parse the "Anomaly" column.

    Returns:
        pl.DataFrame: Normalized frame sorted by timestamp.

    Raises:
        FileNotFoundError: If path does not exist.
        UsageDataError: If required columns are missing.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Required file not found: {p}")
    raw = pl.read_csv(p, infer_schema_length=0)
    need = list(_REQUIRED) + (["Anomaly"] if anomaly else [])
    missing = [c for c in need if c not in raw.columns]
    if missing:
        raise UsageDataError(f"{p.name} is missing required columns: {missing!r}")

    cols = [
        pl.col("Timestamp").str.strip_chars().str.to_datetime(strict=False).alias("timestamp"),
        pl.col("Device Name").str.strip_chars().alias("device"),
        pl.col("Volume Used (L)").cast(pl.Float64, strict=False).alias("volume"),
    ]
    if anomaly:
        cols.append((pl.col("Anomaly").str.strip_chars() == "1").fill_null(False).alias("is_anomaly"))

    df = (
        raw.select(cols)
        .drop_nulls(["timestamp", "volume"])
        .with_columns(pl.col("timestamp").dt.date().alias("date"))
        .sort("timestamp")
    )
    ordered = ["timestamp", "date", "device", "volume"] + (["is_anomaly"] if anomaly else [])
    return df.select(ordered)


def device_label(device: str) -> str:
    """Human label for a device id: "bathroom_sink_2" -> "bathroom sink 2"."""
    if device == "all":
        return "All fixtures"
    return device.replace("_", " ")


def filter_device(df: pl.DataFrame, device: str) -> pl.DataFrame:
    """Keep rows for one device; "all" keeps everything."""
    if device == "all":
        return df
    return df.filter(pl.col("device") == device)


def filter_window(df: pl.DataFrame, start: datetime, end: datetime) -> pl.DataFrame:
    """Keep rows with start <= timestamp <= end."""
    return df.filter(pl.col("timestamp").is_between(start, end, closed="both"))


def filter_dates(df: pl.DataFrame, start: date, end: date) -> pl.DataFrame:
    """Keep rows whose calendar date lies in [start, end]."""
    return df.filter(pl.col("date").is_between(start, end, closed="both"))


def _shift_months(d: datetime, months: int) -> datetime:
    # Clamp to the last day of the target month (Jan 31 + 1 month -> Feb 28/29).
    idx = d.month - 1 + months
    year, month = d.year + idx // 12, idx % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def forecast_window(start: date | datetime, time_range: ForecastRange) -> tuple[datetime, datetime]:
    """Forward window from start for a forecast period.

    Args:
        start (date | datetime): First day of the window (midnight when a date).
        time_range (ForecastRange): "1week", "1month", "3months", "6months" or "1year".

    Returns:
        tuple[datetime, datetime]: (start, end), both inclusive.

    Raises:
        ValueError: If time_range is unknown.
    """
    begin = start if isinstance(start, datetime) else datetime.combine(start, time.min)
    if time_range == "1week":
        return begin, begin + timedelta(days=7)
    if time_range in _MONTHS:
        return begin, _shift_months(begin, _MONTHS[time_range])
    raise ValueError(f"unknown forecast range {time_range!r}")


def trailing_window(now: datetime, time_range: TrailingRange) -> tuple[datetime, datetime]:
    """Backward window ending at now.

    "today" starts at local midnight of now; the others subtract 7 days or 1/3/6/12 months.

    Raises:
        ValueError: If time_range is unknown.
    """
    if time_range == "today":
        return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo), now
    if time_range == "1week":
        return now - timedelta(days=7), now
    if time_range in _MONTHS:
        return _shift_months(now, -_MONTHS[time_range]), now
    raise ValueError(f"unknown time range {time_range!r}")


def aggregate_by_day(df: pl.DataFrame) -> pl.DataFrame:
    """Daily total volume rounded to 2 decimals, ascending by date.

    Returns:
        pl.DataFrame: Columns date (Date), volume (Float64).
    """
    if df.is_empty():
        return pl.DataFrame(schema={"date": pl.Date, "volume": pl.Float64})
    return (
        df.group_by("date")
        .agg(pl.col("volume").sum().round(2).alias("volume"))
        .sort("date")
    )


def total_volume(df: pl.DataFrame) -> float:
    """Summed volume rounded to 2 decimals (0.0 for an empty frame)."""
    if df.is_empty():
        return 0.0
    return round(float(df.get_column("volume").sum()), 2)


def group_anomalies_by_date(df: pl.DataFrame) -> list[AnomalyGroup]:
    """Group anomalous rows by date, most recent date first.

    Within a group rows keep timestamp order. Frames without is_anomaly are treated
    as already filtered to anomalies.
    """
    if "is_anomaly" in df.columns:
        df = df.filter(pl.col("is_anomaly"))
    if df.is_empty():
        return []
    groups: list[AnomalyGroup] = []
    ordered = df.sort(["date", "timestamp"], descending=[True, False])
    for part in ordered.partition_by("date", maintain_order=True):
        day = part.get_column("date")[0]
        rows = part.select("device", "volume", "timestamp").to_dicts()
        groups.append(AnomalyGroup(date=day, rows=rows))
    return groups
