"""
Metrics tabs (Forecast, Current Use, Anomaly) for the water dashboard.

Each tab pairs a pure view function (frame in, frame/number out) with a render
function that owns the widgets. The view functions carry all filtering logic so
they can be tested without Streamlit running.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal, cast

import polars as pl
import streamlit as st

from app import charts as app_charts
from aquaview.usage import (
    DEVICES,
    AnomalyGroup,
    aggregate_by_day,
    device_label,
    filter_dates,
    filter_device,
    filter_window,
    forecast_window,
    group_anomalies_by_date,
    total_volume,
    trailing_window,
)
from aquaview.usage.datasets import ForecastRange, TrailingRange

from .helpers import format_litres

FORECAST_RANGES: dict[str, str] = {
    "1week": "1 Week",
    "1month": "1 Month",
    "3months": "3 Months",
    "6months": "6 Months",
    "1year": "1 Year",
}

TRAILING_RANGES: dict[str, str] = {
    "today": "Today",
    "1week": "Last 7 Days",
    "1month": "Last 30 Days",
    "3months": "Last 3 Months",
    "6months": "Last 6 Months",
    "1year": "Last 12 Months",
}

ViewMode = Literal["all-time", "billing"]


# ----------------------------
# Pure views
# ----------------------------


def forecast_daily(
    df: pl.DataFrame, *, device: str, time_range: ForecastRange, start: date | None = None
) -> pl.DataFrame:
    """Daily forecast volume for a forward window.

    Args:
        df (pl.DataFrame): Normalized forecast frame.
        device (str): Device id or "all".
        time_range (ForecastRange): Forward period.
        start (date | None): Window start; defaults to the first date in df.

    Returns:
        pl.DataFrame: (date, volume) rows, ascending.
    """
    if df.is_empty():
        return aggregate_by_day(df)
    begin = start or df.get_column("date").min()
    lo, hi = forecast_window(cast(date, begin), time_range)
    return aggregate_by_day(filter_device(filter_window(df, lo, hi), device))


def current_view(
    df: pl.DataFrame,
    *,
    device: str,
    mode: ViewMode,
    time_range: TrailingRange = "today",
    billing: tuple[date, date] | None = None,
    now: datetime | None = None,
) -> tuple[pl.DataFrame, float]:
    """Daily usage and total for the Current Use tab.

    In "all-time" mode the window trails ``now`` by time_range; in "billing" mode
    it spans the billing dates inclusively.

    Returns:
        tuple[pl.DataFrame, float]: (daily frame, total litres).
    """
    if mode == "billing":
        if billing is None:
            raise ValueError("billing mode requires a (start, end) date pair")
        windowed = filter_dates(df, billing[0], billing[1])
    else:
        lo, hi = trailing_window(now or datetime.now(), time_range)
        windowed = filter_window(df, lo, hi)
    filtered = filter_device(windowed, device)
    return aggregate_by_day(filtered), total_volume(filtered)


def anomaly_view(
    df: pl.DataFrame, *, date_range: tuple[date, date] | None = None
) -> tuple[list[AnomalyGroup], float]:
    """Anomalies grouped by date plus the anomalous volume within date_range.

    The grouped list always covers the whole dataset; the total is 0.0 until a
    complete date range is chosen.
    """
    anomalies = df.filter(pl.col("is_anomaly")) if "is_anomaly" in df.columns else df
    groups = group_anomalies_by_date(anomalies)
    if date_range is None:
        return groups, 0.0
    return groups, total_volume(filter_dates(anomalies, date_range[0], date_range[1]))


# ----------------------------
# Renderers
# ----------------------------


def _device_select(key: str) -> str:
    return st.selectbox("Fixture", options=list(DEVICES), format_func=device_label, key=key)


def render_forecast(df: pl.DataFrame) -> None:
    st.subheader("Water Usage Forecast")
    if df.is_empty():
        st.info("Forecast dataset is empty.")
        return
    c1, c2, c3 = st.columns(3)
    with c1:
        time_range = st.selectbox(
            "Time Period",
            options=list(FORECAST_RANGES),
            format_func=FORECAST_RANGES.__getitem__,
            key="fc_range",
        )
    with c2:
        device = _device_select("fc_device")
    with c3:
        start = st.date_input("Start Date", value=df.get_column("date").min(), key="fc_start")

    daily = forecast_daily(
        df, device=device, time_range=cast(ForecastRange, time_range), start=cast(date, start)
    )
    if daily.is_empty():
        st.info("No forecast data in the selected window.")
        return
    chart = app_charts.daily_volume_chart(daily, title=f"Forecast: {device_label(device)}")
    st.altair_chart(cast(Any, chart), theme=None, use_container_width=True)


def render_current(df: pl.DataFrame) -> None:
    st.subheader("Current Water Use")
    if df.is_empty():
        st.info("Current usage dataset is empty.")
        return
    mode_label = st.radio(
        "View", options=["All Time", "Billing Period"], horizontal=True, key="cu_mode"
    )
    mode: ViewMode = "billing" if mode_label == "Billing Period" else "all-time"
    earliest = cast(date, df.get_column("date").min())

    c1, c2 = st.columns(2)
    with c1:
        device = _device_select("cu_device")
    with c2:
        if mode == "all-time":
            time_range = st.selectbox(
                "Time Range",
                options=list(TRAILING_RANGES),
                format_func=TRAILING_RANGES.__getitem__,
                key="cu_range",
            )
            billing = None
        else:
            picked = st.date_input(
                "Billing period",
                value=(earliest, date.today()),
                min_value=earliest,
                key="cu_billing",
            )
            time_range = "today"
            billing = tuple(picked) if isinstance(picked, (tuple, list)) else None
            if billing is None or len(billing) != 2:
                st.caption("Pick both a start and an end date.")
                return

    daily, total = current_view(
        df,
        device=device,
        mode=mode,
        time_range=cast(TrailingRange, time_range),
        billing=cast("tuple[date, date] | None", billing),
    )
    st.metric(f"Total usage: {device_label(device)}", format_litres(total))
    if daily.is_empty():
        st.info("No usage recorded in the selected window.")
        return
    chart = app_charts.daily_volume_chart(daily, title="Daily usage")
    st.altair_chart(cast(Any, chart), theme=None, use_container_width=True)


def render_anomaly(df: pl.DataFrame) -> None:
    st.subheader("Anomaly Detection")
    picked = st.date_input("Date range", value=(), key="an_range")
    date_range = (
        cast("tuple[date, date]", tuple(picked))
        if isinstance(picked, (tuple, list)) and len(picked) == 2
        else None
    )
    groups, range_total = anomaly_view(df, date_range=date_range)
    st.metric("Total anomalous usage", format_litres(range_total))

    if not groups:
        st.info("No anomalies detected")
        return
    chart = app_charts.anomaly_counts_chart(groups)
    st.altair_chart(cast(Any, chart), theme=None, use_container_width=True)

    for group in groups:
        with st.expander(f"{group.date.isoformat()} · {group.count} anomalies detected"):
            for row in group.rows:
                ts = cast(datetime, row["timestamp"])
                left, right = st.columns([0.7, 0.3])
                left.markdown(f"**{device_label(str(row['device']))}**  \n{ts:%Y-%m-%d %H:%M:%S}")
                right.markdown(f"**{format_litres(float(cast(float, row['volume'])))}**")
