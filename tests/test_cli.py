"""Tests for CLI entrypoints."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from openpyxl import load_workbook

from hive_tool import cli


def test_parse_args_custom_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "sys.argv",
        [
            "prog",
            "--base-dir",
            "/tmp/base",
            "--period",
            "30days",
            "--channel",
            "humidity",
            "--demo",
            "--days",
            "10",
            "--seed",
            "3",
        ],
    )
    ns = cli.parse_args()
    assert ns.base_dir == "/tmp/base"
    assert ns.period == "30days"
    assert ns.channel == "humidity"
    assert ns.demo is True
    assert ns.days == 10
    assert ns.seed == 3
    assert ns.output is None


def test_parse_args_rejects_unknown_period(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.argv", ["prog", "--period", "fortnight"])
    with pytest.raises(SystemExit):
        cli.parse_args()


def test_main_demo_writes_report(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    out = tmp_path / "demo.xlsx"
    monkeypatch.setattr(
        "sys.argv",
        [
            "prog",
            "--base-dir",
            str(tmp_path),
            "--demo",
            "--seed",
            "5",
            "--output",
            str(out),
        ],
    )
    assert cli.main() == 0
    assert out.exists()
    assert load_workbook(out).sheetnames == ["Readings", "Honey flow", "Diagnostics"]
    printed = capsys.readouterr().out
    assert "OK: Readings: 30" in printed
    assert f"OK: Output: {out}" in printed


def test_main_reads_newest_thingspeak_export(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    feeds = [
        {"created_at": f"2024-03-{day:02d}T10:00:00Z", "field1": str(30 + day)}
        for day in range(1, 10)
    ]
    (tmp_path / "feeds_2024-03-10.json").write_text(
        json.dumps({"feeds": feeds}), encoding="utf-8"
    )
    monkeypatch.setattr("sys.argv", ["prog", "--base-dir", str(tmp_path)])

    assert cli.main() == 0
    reports = list((tmp_path / "reports").glob("hive_report_*.xlsx"))
    assert len(reports) == 1


def test_main_propagates_missing_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    missing = tmp_path / "missing"
    monkeypatch.setattr("sys.argv", ["prog", "--base-dir", str(missing)])
    with pytest.raises(FileNotFoundError):
        cli.main()
