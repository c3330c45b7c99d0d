"""Normalización de registros crudos al formato canónico SensorReading."""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Mapping
from datetime import datetime, tzinfo
from typing import Any

from dateutil import tz

from hive_tool.model import CHANNEL_ALIASES, CHANNELS, SensorReading

_TRUE_FLAGS = {"1", "true", "yes"}


def to_float(value: Any) -> float | None:
    """Coerce numbers and numeric strings; None for anything not finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(result):
        return None
    return result


def format_label(timestamp_ms: int, zone: tzinfo = tz.UTC) -> str:
    """Render a short display label, e.g. ``Oct 7, 02:30 PM``."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=zone)
    return f"{dt:%b} {dt.day}, {dt:%I:%M %p}"


def _lookup(raw: Mapping[str, Any], field_name: str) -> Any:
    if field_name in raw:
        return raw[field_name]
    for alias, target in CHANNEL_ALIASES.items():
        if target == field_name and alias in raw:
            return raw[alias]
    return None


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAGS
    return False


def normalize_reading(
    raw: Mapping[str, Any], zone: tzinfo = tz.UTC
) -> SensorReading | None:
    """Build a SensorReading from a raw record.

    Args:
        raw: Mapping with ``timestamp`` (ms) and channel values, keyed by
            either field names or the camelCase names of the feed.
        zone: Timezone used for the display label.

    Returns:
        The reading, or None when the timestamp is missing, not finite or
        outside the range a calendar date can represent.
    """
    ts = to_float(raw.get("timestamp"))
    if ts is None:
        return None
    timestamp = int(ts)

    values: dict[str, float | None] = {}
    for name in CHANNELS:
        values[name] = to_float(_lookup(raw, name))
    weight = values["weight"]
    if weight is not None and weight <= 0:
        values["weight"] = None

    try:
        generated = format_label(timestamp, zone)
    except (OverflowError, ValueError, OSError):
        return None
    label = raw.get("date")
    if not isinstance(label, str) or not label.strip():
        label = generated

    gps = raw.get("gps_valid", raw.get("gpsValid"))
    return SensorReading(
        timestamp=timestamp,
        date=label,
        gps_valid=_parse_flag(gps),
        **values,
    )


def normalize_readings(
    raws: Iterable[Mapping[str, Any]], zone: tzinfo = tz.UTC
) -> list[SensorReading]:
    """Normalize a batch, dropping records without a usable timestamp."""
    out: list[SensorReading] = []
    for raw in raws:
        reading = normalize_reading(raw, zone)
        if reading is not None:
            out.append(reading)
    return out
