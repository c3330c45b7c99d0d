"""Modelos tipados para lecturas de colmena y resultados de diagnóstico."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

NOT_AVAILABLE = "N/A"

CHANNELS: tuple[str, ...] = (
    "weight",
    "brood_temperature",
    "inside_temperature",
    "outside_temperature",
    "dht_temperature",
    "humidity",
    "battery_voltage",
)

# External record keys (camelCase) -> field names.
CHANNEL_ALIASES: dict[str, str] = {
    "weight": "weight",
    "broodTemperature": "brood_temperature",
    "insideTemperature": "inside_temperature",
    "outsideTemperature": "outside_temperature",
    "dhtTemperature": "dht_temperature",
    "humidity": "humidity",
    "batteryVoltage": "battery_voltage",
}


@dataclass(frozen=True)
class SensorReading:
    """One telemetry sample from a hive scale station."""

    timestamp: int
    date: str = ""
    weight: float | None = None
    brood_temperature: float | None = None
    inside_temperature: float | None = None
    outside_temperature: float | None = None
    dht_temperature: float | None = None
    humidity: float | None = None
    battery_voltage: float | None = None
    gps_valid: bool = False


@dataclass(frozen=True)
class ColonyHealthResult:
    """Penalty based colony health score."""

    score: int | str
    status: str
    factors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SwarmRiskResult:
    """Additive swarm risk score."""

    risk: str
    score: int
    indicators: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HoneyFlowPeriod:
    """Weight gain over one Monday-aligned week."""

    period_start: date
    gain: float
    efficiency_per_day: float


@dataclass(frozen=True)
class HoneyFlowResult:
    """Weekly honey flow periods and their totals."""

    periods: list[HoneyFlowPeriod] = field(default_factory=list)
    total: float | str = NOT_AVAILABLE
    average: float | str = NOT_AVAILABLE
    peak: float | str = NOT_AVAILABLE


@dataclass(frozen=True)
class ChannelStats:
    """Min/max/avg of one channel, formatted with two decimals."""

    min: str = NOT_AVAILABLE
    max: str = NOT_AVAILABLE
    avg: str = NOT_AVAILABLE


def resolve_channel(name: str) -> str:
    """Return the field name for ``name`` (snake_case or camelCase).

    Raises:
        KeyError: If ``name`` is not a numeric channel.
    """
    if name in CHANNELS:
        return name
    if name in CHANNEL_ALIASES:
        return CHANNEL_ALIASES[name]
    raise KeyError(name)
