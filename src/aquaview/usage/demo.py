"""
Deterministic demo datasets for bootstrapping the dashboard.

Writes Current.csv (history ending today), Forecast.csv (starting tomorrow) and
Anomaly.csv (the history again, with a sparse "Anomaly" flag) in the CSV contract
read by aquaview.usage.datasets.load_usage_csv.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from pathlib import Path

import polars as pl

from aquaview.core.constants import ANOMALY_CSV, CURRENT_CSV, FORECAST_CSV

# (device, uses per day (min, max), litres per use (min, max))
_PROFILES: tuple[tuple[str, tuple[int, int], tuple[float, float]], ...] = (
    ("bathroom_sink", (4, 8), (1.0, 4.0)),
    ("bathroom_sink_2", (2, 5), (1.0, 4.0)),
    ("toilet", (4, 7), (4.5, 6.5)),
    ("toilet_2", (2, 5), (4.5, 6.5)),
    ("washing_machine", (0, 1), (40.0, 70.0)),
    ("dishwasher", (0, 1), (10.0, 16.0)),
    ("shower", (1, 3), (35.0, 80.0)),
    ("kitchen_sink", (3, 8), (2.0, 8.0)),
)


def _day_rows(rng: random.Random, day: date) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for device, (lo, hi), (vmin, vmax) in _PROFILES:
        for _ in range(rng.randint(lo, hi)):
            ts = datetime.combine(day, datetime.min.time()) + timedelta(
                minutes=rng.randint(6 * 60, 23 * 60)
            )
            rows.append(
                {
                    "Timestamp": ts.strftime("%Y-%m-%d %H:%M:%S"),
                    "Device Name": device,
                    "Volume Used (L)": round(rng.uniform(vmin, vmax), 2),
                }
            )
    return rows


def _frame(rows: list[dict[str, object]]) -> pl.DataFrame:
    return pl.DataFrame(
        rows,
        schema={"Timestamp": pl.Utf8, "Device Name": pl.Utf8, "Volume Used (L)": pl.Float64},
    ).sort("Timestamp")


def create_demo_datasets(
    data_dir: str | Path,
    *,
    days: int = 90,
    seed: int = 7,
    today: date | None = None,
    anomaly_rate: float = 0.02,
) -> dict[str, Path]:
    """Write demo Current/Forecast/Anomaly CSVs under data_dir.

    Args:
        data_dir (str | Path): Target directory (created if missing).
        days (int): Days of history and of forecast.
        seed (int): RNG seed; identical arguments give identical files.
        today (date | None): Last history day (defaults to date.today()).
        anomaly_rate (float): Share of history rows flagged anomalous (volume tripled).

    Returns:
        dict[str, Path]: Written paths keyed by "current", "forecast", "anomaly".

    Raises:
        ValueError: If days < 1 or anomaly_rate is outside [0, 1].
    """
    if days < 1:
        raise ValueError("days must be >= 1")
    if not 0.0 <= anomaly_rate <= 1.0:
        raise ValueError("anomaly_rate must be in [0, 1]")
    end = today or date.today()
    rng = random.Random(seed)

    history: list[dict[str, object]] = []
    for offset in range(days - 1, -1, -1):
        history.extend(_day_rows(rng, end - timedelta(days=offset)))
    forecast: list[dict[str, object]] = []
    for offset in range(1, days + 1):
        forecast.extend(_day_rows(rng, end + timedelta(days=offset)))

    flagged: list[dict[str, object]] = []
    for row in history:
        if rng.random() < anomaly_rate:
            spiked = round(float(row["Volume Used (L)"]) * 3, 2)  # type: ignore[arg-type]
            flagged.append({**row, "Volume Used (L)": spiked, "Anomaly": "1"})
        else:
            flagged.append({**row, "Anomaly": "0"})

    out = Path(data_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = {
        "current": out / CURRENT_CSV,
        "forecast": out / FORECAST_CSV,
        "anomaly": out / ANOMALY_CSV,
    }
    _frame(history).write_csv(paths["current"])
    _frame(forecast).write_csv(paths["forecast"])
    pl.DataFrame(
        flagged,
        schema={
            "Timestamp": pl.Utf8,
            "Device Name": pl.Utf8,
            "Volume Used (L)": pl.Float64,
            "Anomaly": pl.Utf8,
        },
    ).sort("Timestamp").write_csv(paths["anomaly"])
    return paths
