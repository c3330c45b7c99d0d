"""Lecturas simuladas para modo demo."""

from __future__ import annotations

import random
from datetime import tzinfo

from dateutil import tz

from hive_tool.model import SensorReading
from hive_tool.normalize import format_label
from hive_tool.windowing import DAY_MS

# (low, span): value = low + random() * span
_RANGES: dict[str, tuple[float, float]] = {
    "weight": (30.0, 10.0),
    "brood_temperature": (32.0, 5.0),
    "inside_temperature": (28.0, 5.0),
    "outside_temperature": (10.0, 15.0),
    "battery_voltage": (3.5, 0.5),
    "humidity": (60.0, 20.0),
    "dht_temperature": (25.0, 5.0),
}


def generate_simulated(
    days: int = 30,
    *,
    now_ms: int,
    seed: int | None = None,
    zone: tzinfo = tz.UTC,
) -> list[SensorReading]:
    """Generate one reading per day ending at ``now_ms``, oldest first.

    Args:
        days: Number of readings.
        now_ms: Timestamp of the newest reading.
        seed: Seed for reproducible output.
        zone: Timezone for the display labels.
    """
    rng = random.Random(seed)
    out: list[SensorReading] = []
    for i in range(days):
        timestamp = now_ms - i * DAY_MS
        values = {
            name: round(low + rng.random() * span, 2)
            for name, (low, span) in _RANGES.items()
        }
        out.append(
            SensorReading(
                timestamp=timestamp,
                date=format_label(timestamp, zone),
                gps_valid=rng.random() > 0.5,
                **values,
            )
        )
    out.reverse()
    return out
