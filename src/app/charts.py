from __future__ import annotations

import altair as alt
import polars as pl

from aquaview.usage import AnomalyGroup


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
        .configure_legend(labelFontSize=12, titleFontSize=12)
        .configure_title(fontSize=14)
        .configure_view(strokeOpacity=0)
    )


def _date_values(df: pl.DataFrame) -> list[dict[str, object]]:
    # Vega-Lite wants ISO strings for temporal fields.
    return df.with_columns(pl.col("date").cast(pl.Utf8)).to_dicts()


def daily_volume_chart(
    daily: pl.DataFrame, *, title: str, color: str = "#2563eb"
) -> alt.TopLevelMixin:
    """Line chart of daily volume.

    Args:
        daily (pl.DataFrame): Output of aquaview.usage.aggregate_by_day (date, volume).
        title (str): Chart title.
        color (str): Line color.

    Returns:
        alt.TopLevelMixin: Configured chart.
    """
    ch = (
        alt.Chart(alt.Data(values=_date_values(daily)))
        .mark_line(point=True, color=color)
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("volume:Q", title="Volume (L)"),
            tooltip=[alt.Tooltip("date:T", title="Date"), alt.Tooltip("volume:Q", title="Litres")],
        )
        .properties(title=title, height=320)
    )
    return _apply_chart_defaults(ch)


def anomaly_counts_chart(groups: list[AnomalyGroup]) -> alt.TopLevelMixin:
    """Bar chart of anomalous readings per day."""
    values = [{"date": g.date.isoformat(), "count": g.count} for g in groups]
    ch = (
        alt.Chart(alt.Data(values=values))
        .mark_bar(color="#dc2626")
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("count:Q", title="Anomalies"),
            tooltip=[alt.Tooltip("date:T", title="Date"), alt.Tooltip("count:Q", title="Count")],
        )
        .properties(title="Anomalies per day", height=220)
    )
    return _apply_chart_defaults(ch)
