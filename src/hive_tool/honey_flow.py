"""Flujo de miel: ganancia de peso por semana (lunes a domingo)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from dateutil import tz

from hive_tool.model import (
    NOT_AVAILABLE,
    HoneyFlowPeriod,
    HoneyFlowResult,
    SensorReading,
)
from hive_tool.windowing import DAY_MS, readings_to_frame, weight_values


def week_start(timestamp_ms: int, zone: tzinfo = tz.UTC) -> date:
    """Monday of the calendar week containing ``timestamp_ms`` in ``zone``.

    Sundays belong to the week that started six days earlier.
    """
    day = datetime.fromtimestamp(timestamp_ms / 1000, tz=zone).date()
    return day - timedelta(days=day.weekday())


def _safe_week_start(timestamp_ms: int, zone: tzinfo) -> date | None:
    try:
        return week_start(timestamp_ms, zone)
    except (OverflowError, ValueError, OSError):
        return None


def honey_flow(
    readings: Sequence[SensorReading], zone: tzinfo = tz.UTC
) -> HoneyFlowResult:
    """Compute weekly weight gain and daily efficiency.

    Args:
        readings: Series in any order; sorted internally on a copy.
        zone: Timezone that decides where a week starts.

    Returns:
        One period per week with at least two weighed readings, plus the
        total, average and peak gain. Fewer than two readings yields an
        empty result with ``N/A`` totals. Readings whose timestamp has no
        calendar date are skipped.

        The peak is the largest weekly gain and is not floored at 0, so a
        series made only of losing weeks reports a negative peak. It is 0
        only when no period qualifies.
    """
    if len(readings) < 2:
        return HoneyFlowResult()

    frame = readings_to_frame(readings)
    frame["weight"] = weight_values(frame["weight"])
    frame["week"] = [_safe_week_start(int(ts), zone) for ts in frame["timestamp"]]
    frame = frame.dropna(subset=["weight", "week"])

    periods: list[HoneyFlowPeriod] = []
    gains: list[float] = []
    for week, bucket in frame.groupby("week", sort=True):
        if len(bucket) < 2:
            continue
        first = bucket.iloc[0]
        last = bucket.iloc[-1]
        gain = float(last["weight"] - first["weight"])
        duration_days = (int(last["timestamp"]) - int(first["timestamp"])) / DAY_MS
        efficiency = gain / duration_days if duration_days > 0 else 0.0
        periods.append(
            HoneyFlowPeriod(
                period_start=week,
                gain=round(gain, 2),
                efficiency_per_day=round(efficiency, 3),
            )
        )
        gains.append(gain)

    total = float(sum(gains))
    return HoneyFlowResult(
        periods=periods,
        total=round(total, 2),
        average=round(total / len(gains), 2) if gains else NOT_AVAILABLE,
        peak=round(max(gains), 2) if gains else 0.0,
    )
