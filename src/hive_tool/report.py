"""Reporte completo de una colmena: salud, enjambrazón, flujo y estadísticas."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo

from dateutil import tz

from hive_tool.health import colony_health
from hive_tool.honey_flow import honey_flow
from hive_tool.model import (
    ChannelStats,
    ColonyHealthResult,
    HoneyFlowResult,
    SensorReading,
    SwarmRiskResult,
    resolve_channel,
)
from hive_tool.stats import channel_stats
from hive_tool.swarm import swarm_risk
from hive_tool.windowing import select_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HiveReport:
    """All diagnostics for one reading series."""

    period: str
    channel: str
    generated_at_ms: int
    reading_count: int
    window_count: int
    colony_health: ColonyHealthResult
    swarm_risk: SwarmRiskResult
    honey_flow: HoneyFlowResult
    stats: ChannelStats


def build_report(
    readings: Sequence[SensorReading],
    *,
    now_ms: int,
    period: str = "7days",
    channel: str = "weight",
    zone: tzinfo = tz.UTC,
) -> HiveReport:
    """Run every scorer over ``readings``.

    Health and swarm risk look at the full series; honey flow and the channel
    statistics only at the readings inside ``period``.

    Args:
        readings: Series in any order.
        now_ms: Reference time for the period window.
        period: Duration name, or ``all`` for the whole series.
        channel: Channel summarized by the statistics.
        zone: Timezone for week bucketing.
    """
    column = resolve_channel(channel)
    window = select_window(readings, period, now_ms=now_ms)
    report = HiveReport(
        period=period,
        channel=column,
        generated_at_ms=now_ms,
        reading_count=len(readings),
        window_count=len(window),
        colony_health=colony_health(readings),
        swarm_risk=swarm_risk(readings),
        honey_flow=honey_flow(window, zone),
        stats=channel_stats(window, column),
    )
    logger.info(
        "Report built",
        extra={
            "reading_count": report.reading_count,
            "period": period,
            "channel": column,
            "health_score": report.colony_health.score,
            "swarm_risk": report.swarm_risk.risk,
        },
    )
    return report
