from __future__ import annotations

import pytest

from hive_tool.model import CHANNELS, SensorReading
from hive_tool.windowing import (
    DAY_MS,
    FRAME_COLUMNS,
    TrailingCount,
    readings_to_frame,
    select_window,
    sort_readings,
    trailing,
    valid_values,
)

_NOW = 1_710_000_000_000


def _at(age_ms: int, weight: float | None = 30.0) -> SensorReading:
    return SensorReading(timestamp=_NOW - age_ms, weight=weight)


@pytest.mark.parametrize(
    ("window", "expected_ages"),
    [
        ("today", [0, DAY_MS]),
        ("3days", [0, DAY_MS, DAY_MS + 1, 3 * DAY_MS]),
        ("7days", [0, DAY_MS, DAY_MS + 1, 3 * DAY_MS, 7 * DAY_MS]),
        ("30days", [0, DAY_MS, DAY_MS + 1, 3 * DAY_MS, 7 * DAY_MS, 20 * DAY_MS]),
    ],
)
def test_duration_window_keeps_recent_readings(
    window: str, expected_ages: list[int]
) -> None:
    ages = [20 * DAY_MS, 0, 7 * DAY_MS, DAY_MS + 1, 45 * DAY_MS, DAY_MS, 3 * DAY_MS]
    readings = [_at(age) for age in ages]
    out = select_window(readings, window, now_ms=_NOW)
    assert sorted(_NOW - r.timestamp for r in out) == expected_ages


def test_duration_window_preserves_input_order() -> None:
    readings = [_at(DAY_MS // 2), _at(0), _at(DAY_MS // 4)]
    assert select_window(readings, "today", now_ms=_NOW) == readings


def test_unknown_spec_returns_whole_series_copy() -> None:
    readings = [_at(40 * DAY_MS), _at(0)]
    out = select_window(readings, "all", now_ms=_NOW)
    assert out == readings
    assert out is not readings


def test_duration_window_on_empty_series() -> None:
    assert select_window([], "today") == []


def test_duration_window_requires_now() -> None:
    with pytest.raises(ValueError, match="now_ms"):
        select_window([_at(0)], "7days")


def test_trailing_count_sorts_and_takes_last() -> None:
    readings = [_at(age * DAY_MS) for age in (3, 0, 5, 1, 4, 2)]
    out = select_window(readings, TrailingCount(3))
    assert [_NOW - r.timestamp for r in out] == [2 * DAY_MS, DAY_MS, 0]


def test_trailing_count_shorter_series_and_empty() -> None:
    readings = [_at(DAY_MS), _at(0)]
    assert trailing(readings, 14) == readings
    assert select_window([], TrailingCount(7)) == []


def test_window_does_not_mutate_input() -> None:
    readings = [_at(age * DAY_MS) for age in (3, 0, 5)]
    snapshot = list(readings)
    select_window(readings, TrailingCount(2))
    select_window(readings, "3days", now_ms=_NOW)
    assert readings == snapshot


def test_readings_to_frame_empty_keeps_columns() -> None:
    df = readings_to_frame([])
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_readings_to_frame_sorts_and_coerces() -> None:
    df = readings_to_frame([_at(0, weight=None), _at(DAY_MS, weight=31.5)])
    assert list(df["timestamp"]) == [_NOW - DAY_MS, _NOW]
    assert df.loc[0, "weight"] == 31.5
    assert df["weight"].isna().iloc[1]
    for name in CHANNELS:
        assert df[name].dtype == float


def test_valid_values_filters_nan_inf_and_non_positive() -> None:
    df = readings_to_frame(
        [
            _at(0, weight=float("inf")),
            _at(1, weight=float("nan")),
            _at(2, weight=-3.0),
            _at(3, weight=0.0),
            _at(4, weight=2.0),
        ]
    )
    assert sorted(valid_values(df["weight"])) == [-3.0, 0.0, 2.0]
    assert list(valid_values(df["weight"], positive=True)) == [2.0]


def test_tied_timestamps_sort_by_weight_in_list_and_frame() -> None:
    readings = [
        _at(0, weight=None),
        _at(0, weight=31.0),
        _at(DAY_MS, weight=30.0),
        _at(0, weight=30.5),
    ]
    expected = [30.0, 30.5, 31.0, None]
    assert [r.weight for r in sort_readings(readings)] == expected
    assert [r.weight for r in sort_readings(readings[::-1])] == expected

    df = readings_to_frame(readings[::-1])
    assert list(df["weight"].iloc[:3]) == [30.0, 30.5, 31.0]
    assert df["weight"].isna().iloc[3]
