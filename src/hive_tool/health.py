"""Puntaje de salud de la colonia por penalizaciones."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from hive_tool.model import NOT_AVAILABLE, ColonyHealthResult, SensorReading
from hive_tool.windowing import (
    readings_to_frame,
    trailing,
    valid_values,
    weight_values,
)

HEALTH_WINDOW = 14
TREND_MIN_READINGS = 7

BROOD_RANGE = (32.0, 36.0)
HUMIDITY_RANGE = (50.0, 70.0)
LOW_BATTERY_V = 3.6

BROOD_PENALTY = 20
WEIGHT_LOSS_PENALTY = 15
HUMIDITY_PENALTY = 10
BATTERY_PENALTY = 5


def health_status(score: int) -> str:
    """Map a 0-100 score to its status band."""
    if score < 60:
        return "Poor"
    if score < 75:
        return "Fair"
    if score < 90:
        return "Good"
    return "Excellent"


def colony_health(readings: Sequence[SensorReading]) -> ColonyHealthResult:
    """Score colony health over the last 14 readings.

    Starts at 100 and subtracts a penalty per out-of-range channel: brood
    temperature, weight trend, humidity and battery. Channels with no valid
    values add no factor and no penalty.
    """
    if not readings:
        return ColonyHealthResult(
            score=NOT_AVAILABLE,
            status="Unknown",
            factors=["No data to assess health."],
        )

    recent = readings_to_frame(trailing(readings, HEALTH_WINDOW), sort=False)
    factors: list[str] = []
    score = 100

    brood = valid_values(recent["brood_temperature"])
    if not brood.empty:
        avg_brood = float(brood.mean())
        low, high = BROOD_RANGE
        if avg_brood < low or avg_brood > high:
            factors.append(
                f"Brood temperature ({avg_brood:.1f}°C) is outside optimal "
                "range (32-36°C)."
            )
            score -= BROOD_PENALTY
        else:
            factors.append(f"Brood temperature ({avg_brood:.1f}°C) is optimal.")

    if len(recent) >= TREND_MIN_READINGS:
        trend = _weight_trend(recent["weight"])
        if trend is not None:
            if trend > 0.5:
                factors.append("Positive weight gain trend detected.")
            elif trend < -1:
                factors.append("Concerning weight loss trend detected.")
                score -= WEIGHT_LOSS_PENALTY
            else:
                factors.append("Stable weight trend.")

    humidity = valid_values(recent["humidity"])
    if not humidity.empty:
        avg_humidity = float(humidity.mean())
        low, high = HUMIDITY_RANGE
        if avg_humidity < low or avg_humidity > high:
            factors.append(
                f"Humidity ({avg_humidity:.1f}%) is outside optimal range (50-70%)."
            )
            score -= HUMIDITY_PENALTY
        else:
            factors.append(f"Humidity ({avg_humidity:.1f}%) is optimal.")

    battery = valid_values(recent["battery_voltage"])
    if not battery.empty:
        min_battery = float(battery.min())
        if min_battery < LOW_BATTERY_V:
            factors.append(
                f"Low battery voltage detected ({min_battery:g}V). Consider charging."
            )
            score -= BATTERY_PENALTY

    score = max(0, score)
    return ColonyHealthResult(score=score, status=health_status(score), factors=factors)


def _weight_trend(weights_column: pd.Series) -> float | None:
    """Average weight of the second half minus the first half (split by index)."""
    weights = weight_values(weights_column)
    half = len(weights) // 2
    first = weights.iloc[:half].dropna()
    second = weights.iloc[half:].dropna()
    if first.empty or second.empty:
        return None
    return float(second.mean() - first.mean())
