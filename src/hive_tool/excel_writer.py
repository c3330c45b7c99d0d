"""Generación de Excel formateado con lecturas y diagnósticos de la colmena."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

import pandas as pd
from dateutil import tz
from openpyxl.styles import Alignment, Border, Font, Side

from hive_tool.model import SensorReading
from hive_tool.report import HiveReport
from hive_tool.windowing import readings_to_frame

_WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_HEADER_MAP: dict[str, str] = {
    "weekday": "Day",
    "datetime": "Date / Time",
    "weight": "Weight (kg)",
    "brood_temperature": "Brood\n(°C)",
    "inside_temperature": "Inside\n(°C)",
    "outside_temperature": "Outside\n(°C)",
    "dht_temperature": "DHT\n(°C)",
    "humidity": "Humidity\n(%)",
    "battery_voltage": "Battery\n(V)",
    "gps_valid": "GPS",
}

_READING_COLUMNS: list[str] = list(_HEADER_MAP)

_WIDTHS: dict[str, int] = {
    "Day": 6,
    "Date / Time": 18,
    "Weight (kg)": 12,
    "Week start": 12,
    "Gain (kg)": 10,
    "Efficiency\n(kg/day)": 12,
    "Metric": 28,
    "Value": 60,
}

_NUMBER_FORMATS: dict[str, str] = {
    "Date / Time": "dd/mm/yyyy hh:mm",
    "Weight (kg)": "0.00",
    "Brood\n(°C)": "0.0",
    "Inside\n(°C)": "0.0",
    "Outside\n(°C)": "0.0",
    "DHT\n(°C)": "0.0",
    "Humidity\n(%)": "0.0",
    "Battery\n(V)": "0.00",
    "Week start": "dd/mm/yyyy",
    "Gain (kg)": "0.00",
    "Efficiency\n(kg/day)": "0.000",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Sheet names of the hive workbook."""

    readings_sheet: str = "Readings"
    honey_flow_sheet: str = "Honey flow"
    diagnostics_sheet: str = "Diagnostics"


def readings_export_frame(
    readings: Sequence[SensorReading], zone: tzinfo = tz.UTC
) -> pd.DataFrame:
    """Readings sorted by time with weekday and naive local datetime columns."""
    df = readings_to_frame(readings)
    if df.empty:
        return pd.DataFrame(columns=_READING_COLUMNS)
    local = pd.to_datetime(df["timestamp"], unit="ms", utc=True).dt.tz_convert(zone)
    df["datetime"] = local.dt.tz_localize(None)
    df["weekday"] = local.dt.weekday.map(lambda i: _WEEKDAYS[int(i)])
    return df[_READING_COLUMNS]


def honey_flow_frame(report: HiveReport) -> pd.DataFrame:
    columns = ["Week start", "Gain (kg)", "Efficiency\n(kg/day)"]
    rows = [
        (p.period_start, p.gain, p.efficiency_per_day)
        for p in report.honey_flow.periods
    ]
    return pd.DataFrame(rows, columns=columns)


def diagnostics_frame(report: HiveReport) -> pd.DataFrame:
    """Una fila métrica/valor por cada resultado del reporte."""
    health = report.colony_health
    swarm = report.swarm_risk
    flow = report.honey_flow
    stats = report.stats
    rows: list[tuple[str, object]] = [
        ("Period", report.period),
        ("Readings (total)", report.reading_count),
        ("Readings (in period)", report.window_count),
        ("Colony health score", health.score),
        ("Colony health status", health.status),
        *[("Health factor", factor) for factor in health.factors],
        ("Swarm risk", swarm.risk),
        ("Swarm risk score", swarm.score),
        *[("Swarm indicator", indicator) for indicator in swarm.indicators],
        ("Honey flow total (kg)", flow.total),
        ("Honey flow average (kg/week)", flow.average),
        ("Honey flow peak (kg)", flow.peak),
        (f"{report.channel} min", stats.min),
        (f"{report.channel} max", stats.max),
        (f"{report.channel} avg", stats.avg),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def write_hive_xlsx(
    report: HiveReport,
    readings: Sequence[SensorReading],
    out_path: Path,
    layout: ExcelLayout,
    zone: tzinfo = tz.UTC,
) -> None:
    """Write the readings and the report into a formatted workbook.

    Args:
        report: Diagnostics to render.
        readings: Series the report was computed from.
        out_path: Output path for the XLSX file.
        layout: Sheet names.
        zone: Timezone for the date/time column.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    sheets = {
        layout.readings_sheet: readings_export_frame(readings, zone).rename(
            columns=_HEADER_MAP
        ),
        layout.honey_flow_sheet: honey_flow_frame(report),
        layout.diagnostics_sheet: diagnostics_frame(report),
    }

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, index=False, sheet_name=name)
            _format_sheet(writer.book[name])


def _style_header_row(ws: Any) -> None:
    """Negrita, alineación centrada y borde en la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border


def _get_header_col_index(ws: Any) -> dict[str, int]:
    """Devuelve mapa nombre de cabecera -> índice de columna (1-based)."""
    headers = [str(cell.value) for cell in ws[1]]
    return {name: idx + 1 for idx, name in enumerate(headers)}


def _apply_column_widths(ws: Any, col_index: dict[str, int]) -> None:
    for header, width in _WIDTHS.items():
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = width


def _apply_number_formats(ws: Any, col_index: dict[str, int]) -> None:
    for row in ws.iter_rows(min_row=2):
        for header, fmt in _NUMBER_FORMATS.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx - 1].number_format = fmt


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    col_index = _get_header_col_index(ws)
    _apply_column_widths(ws, col_index)
    _apply_number_formats(ws, col_index)
