"""Selección de ventanas temporales y conversión a DataFrame."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass

import pandas as pd

from hive_tool.model import CHANNELS, SensorReading

DAY_MS = 24 * 60 * 60 * 1000

DURATION_WINDOWS: dict[str, int] = {
    "today": DAY_MS,
    "3days": 3 * DAY_MS,
    "7days": 7 * DAY_MS,
    "30days": 30 * DAY_MS,
}

FRAME_COLUMNS: list[str] = ["timestamp", "date", *CHANNELS, "gps_valid"]


@dataclass(frozen=True)
class TrailingCount:
    """Window made of the last ``count`` readings by timestamp."""

    count: int


WindowSpec = str | TrailingCount


def _order_key(reading: SensorReading) -> tuple[int, bool, float]:
    weight = reading.weight
    if weight is None or not math.isfinite(weight):
        return (reading.timestamp, True, 0.0)
    return (reading.timestamp, False, weight)


def sort_readings(readings: Sequence[SensorReading]) -> list[SensorReading]:
    """Return a new list sorted by timestamp, ties broken by weight.

    Readings without a usable weight go last within a tied timestamp.
    """
    return sorted(readings, key=_order_key)


def trailing(readings: Sequence[SensorReading], count: int) -> list[SensorReading]:
    """Last ``count`` readings by timestamp, or all of them if fewer."""
    if count <= 0:
        return []
    return sort_readings(readings)[-count:]


def within_duration(
    readings: Sequence[SensorReading], duration_ms: int, now_ms: int
) -> list[SensorReading]:
    """Readings no older than ``duration_ms`` relative to ``now_ms``."""
    return [r for r in readings if now_ms - r.timestamp <= duration_ms]


def select_window(
    readings: Sequence[SensorReading],
    window: WindowSpec,
    *,
    now_ms: int | None = None,
) -> list[SensorReading]:
    """Select a sub-series by duration name or trailing count.

    Args:
        readings: Series in any order; never modified.
        window: ``today``/``3days``/``7days``/``30days`` or a TrailingCount.
        now_ms: Reference time in epoch ms, required for duration names.

    Returns:
        New list. Unknown duration names return the whole series.

    Raises:
        ValueError: If a duration window is requested without ``now_ms``.
    """
    if isinstance(window, TrailingCount):
        return trailing(readings, window.count)

    duration = DURATION_WINDOWS.get(window)
    if duration is None or not readings:
        return list(readings)
    if now_ms is None:
        raise ValueError(f"now_ms is required for the {window!r} window")
    return within_duration(readings, duration, now_ms)


def readings_to_frame(
    readings: Sequence[SensorReading], sort: bool = True
) -> pd.DataFrame:
    """Convert readings to a DataFrame with float channel columns (NaN = missing)."""
    df = pd.DataFrame([asdict(r) for r in readings], columns=FRAME_COLUMNS)
    if df.empty:
        return df
    for name in CHANNELS:
        df[name] = pd.to_numeric(df[name], errors="coerce").astype(float)
    if sort:
        df = df.sort_values(
            ["timestamp", "weight"], kind="stable", na_position="last"
        )
    return df.reset_index(drop=True)


def valid_values(values: pd.Series, positive: bool = False) -> pd.Series:
    """Drop non-numeric, NaN and infinite values (and <= 0 if ``positive``)."""
    numeric = pd.to_numeric(values, errors="coerce").astype(float)
    numeric = numeric[numeric.abs() != float("inf")].dropna()
    if positive:
        numeric = numeric[numeric > 0]
    return numeric


def weight_values(values: pd.Series) -> pd.Series:
    """Weights aligned with the input index; invalid or <= 0 become NaN."""
    numeric = pd.to_numeric(values, errors="coerce").astype(float)
    return numeric.where((numeric > 0) & (numeric != float("inf")))
