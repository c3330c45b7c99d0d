"""Lectura de exportaciones JSON de canales ThingSpeak."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

from dateutil import parser, tz

from hive_tool.model import SensorReading
from hive_tool.normalize import normalize_reading
from hive_tool.sources.base import DataSource, SourcePaths
from hive_tool.windowing import sort_readings

logger = logging.getLogger(__name__)

# Channel field layout of the hive scale firmware.
FIELD_MAP: dict[str, str] = {
    "field1": "weight",
    "field2": "brood_temperature",
    "field3": "inside_temperature",
    "field4": "outside_temperature",
    "field5": "battery_voltage",
    "field6": "humidity",
    "field7": "dht_temperature",
    "field8": "gps_valid",
}


@dataclass(frozen=True)
class ThingSpeakPaths(SourcePaths):
    """Paths for ThingSpeak feed exports."""

    # root: folder containing feeds_*.json


class ThingSpeakSource(DataSource):
    """ThingSpeak channel feed export reader."""

    def __init__(self, paths: ThingSpeakPaths, zone: tzinfo = tz.UTC) -> None:
        super().__init__(paths)
        self._zone = zone

    def validate(self) -> None:
        """Validate that the export directory exists."""
        if not self.root.exists():
            raise FileNotFoundError(str(self.root))

    def newest_json(self) -> Path:
        """Return newest feeds_*.json by mtime."""
        files = sorted(
            self.root.glob("feeds_*.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No feeds_*.json in {self.root}")
        return files[0]

    def load_readings(self, path: Path) -> list[SensorReading]:
        """Parse a feed export into readings sorted by timestamp.

        Args:
            path: Path to the JSON export.

        Returns:
            Normalized readings; entries without a usable ``created_at`` are
            skipped.

        Raises:
            ValueError: If the payload has no feed list.
        """
        payload = json.loads(path.read_text(encoding="utf-8"))
        feeds = _extract_feeds(payload)

        out: list[SensorReading] = []
        for feed in feeds:
            reading = _feed_to_reading(feed, self._zone)
            if reading is not None:
                out.append(reading)
        skipped = len(feeds) - len(out)
        if skipped:
            logger.warning(
                "Skipped unusable feed entries",
                extra={"source_file": path.name, "skipped": skipped},
            )
        out = sort_readings(out)
        logger.info(
            "Loaded ThingSpeak export",
            extra={"source_file": path.name, "reading_count": len(out)},
        )
        return out


def _extract_feeds(payload: Any) -> list[Any]:
    """Acepta el objeto completo del canal o directamente la lista de feeds."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("feeds"), list):
        return payload["feeds"]
    raise ValueError("ThingSpeak export must be a list or contain a 'feeds' list")


def _parse_created_at(value: Any, zone: tzinfo) -> int | None:
    """ISO-8601 -> epoch ms; None si no se puede interpretar."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = parser.isoparse(value.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return int(dt.timestamp() * 1000)


def _feed_to_reading(feed: Any, zone: tzinfo) -> SensorReading | None:
    if not isinstance(feed, dict):
        return None
    timestamp = _parse_created_at(feed.get("created_at"), zone)
    if timestamp is None:
        return None
    raw: dict[str, Any] = {"timestamp": timestamp}
    for field_key, name in FIELD_MAP.items():
        raw[name] = feed.get(field_key)
    return normalize_reading(raw, zone)
