from __future__ import annotations

import pytest

from hive_tool.model import ChannelStats, SensorReading
from hive_tool.stats import channel_stats


def _weights(*values: float | None) -> list[SensorReading]:
    return [SensorReading(timestamp=i * 1000, weight=v) for i, v in enumerate(values)]


def test_all_zero_weights_are_not_available() -> None:
    assert channel_stats(_weights(0.0, 0.0, 0.0), "weight") == ChannelStats(
        min="N/A", max="N/A", avg="N/A"
    )


def test_empty_series_is_not_available() -> None:
    assert channel_stats([], "humidity") == ChannelStats()


def test_non_positive_and_missing_values_are_filtered() -> None:
    readings = _weights(30.0, 0.0, -1.0, None, float("nan"), 32.456)
    stats = channel_stats(readings, "weight")
    assert stats == ChannelStats(min="30.00", max="32.46", avg="31.23")


def test_camel_case_channel_name_is_accepted() -> None:
    readings = [
        SensorReading(timestamp=0, brood_temperature=33.0),
        SensorReading(timestamp=1, brood_temperature=35.0),
    ]
    assert channel_stats(readings, "broodTemperature") == ChannelStats(
        min="33.00", max="35.00", avg="34.00"
    )


def test_unknown_channel_raises() -> None:
    with pytest.raises(KeyError):
        channel_stats(_weights(30.0), "pressure")
