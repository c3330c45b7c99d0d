"""CLI: diagnóstico de colmena (salud, enjambrazón, flujo de miel) en Excel."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

from hive_tool.excel_writer import ExcelLayout, write_hive_xlsx
from hive_tool.logging_config import configure_logging
from hive_tool.model import CHANNELS
from hive_tool.report import build_report
from hive_tool.settings import PERIOD_CHOICES, get_settings
from hive_tool.sources.simulated import generate_simulated
from hive_tool.sources.thingspeak import ThingSpeakPaths, ThingSpeakSource

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Hive diagnostics: colony health, swarm risk and honey flow."
    )
    parser.add_argument(
        "--base-dir",
        default=str(settings.base_dir),
        help="Base directory with feeds_*.json exports (default: %(default)s).",
    )
    parser.add_argument(
        "--period",
        choices=PERIOD_CHOICES,
        default=settings.default_period,
        help="Window for honey flow and statistics (default: %(default)s).",
    )
    parser.add_argument(
        "--channel",
        choices=CHANNELS,
        default="weight",
        help="Channel summarized by min/max/avg (default: %(default)s).",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use simulated readings instead of a ThingSpeak export.",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=30,
        help="Number of simulated days in demo mode.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Demo data seed.")
    parser.add_argument("--output", default=None, help="Output XLSX path.")
    return parser.parse_args()


def main() -> int:
    """Run the diagnostics CLI.

    Returns:
        Exit code (0 on success).
    """
    configure_logging()
    ns = parse_args()
    settings = get_settings()
    zone = settings.zone
    base = Path(ns.base_dir).expanduser().resolve()

    now = datetime.now(tz=zone)
    now_ms = int(now.timestamp() * 1000)

    if ns.demo:
        readings = generate_simulated(ns.days, now_ms=now_ms, seed=ns.seed, zone=zone)
        source_label = f"simulated ({ns.days} days)"
    else:
        source = ThingSpeakSource(ThingSpeakPaths(root=base), zone=zone)
        source.validate()
        feed_file = source.newest_json()
        readings = source.load_readings(feed_file)
        source_label = str(feed_file)

    report = build_report(
        readings, now_ms=now_ms, period=ns.period, channel=ns.channel, zone=zone
    )

    if ns.output:
        out_path = Path(ns.output).expanduser()
    else:
        ts = now.strftime("%Y-%m-%d_%H-%M-%S")
        out_path = base / "reports" / f"hive_report_{ts}.xlsx"

    write_hive_xlsx(report, readings, out_path, ExcelLayout(), zone=zone)
    logger.info("Report written", extra={"output": str(out_path)})

    health = report.colony_health
    print(f"OK: Source: {source_label}")
    print(f"OK: Readings: {report.reading_count}")
    print(f"OK: Colony health: {health.score} ({health.status})")
    print(f"OK: Swarm risk: {report.swarm_risk.risk} ({report.swarm_risk.score})")
    print(f"OK: Honey flow total: {report.honey_flow.total}")
    print(f"OK: Output: {out_path}")
    return 0
