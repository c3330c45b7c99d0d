"""Estadísticas resumidas (min/max/promedio) por canal."""

from __future__ import annotations

from collections.abc import Sequence

from hive_tool.model import ChannelStats, SensorReading, resolve_channel
from hive_tool.windowing import readings_to_frame, valid_values


def channel_stats(readings: Sequence[SensorReading], channel: str) -> ChannelStats:
    """Min/max/avg of ``channel`` as two-decimal strings.

    Zero and negative values count as sensor errors and are excluded. When no
    value survives the filter all three fields are ``N/A``.

    Raises:
        KeyError: If ``channel`` is not a numeric channel.
    """
    column = resolve_channel(channel)
    if not readings:
        return ChannelStats()
    frame = readings_to_frame(readings, sort=False)
    values = valid_values(frame[column], positive=True)
    if values.empty:
        return ChannelStats()
    return ChannelStats(
        min=f"{values.min():.2f}",
        max=f"{values.max():.2f}",
        avg=f"{values.mean():.2f}",
    )
