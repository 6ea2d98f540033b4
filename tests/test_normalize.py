from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from spc_axis.temporal.normalize import (
    AxisKind,
    detect_axis_kind,
    normalize_temporal,
    parse_danish_dates,
)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        (pd.date_range("2024-01-01", periods=3, freq="D"), AxisKind.temporal),
        (pd.Series(pd.to_datetime(["2024-01-01", "2024-02-01"])), AxisKind.temporal),
        ([date(2024, 1, 1), None, date(2024, 1, 2)], AxisKind.temporal),
        (np.array(["2024-01-01", "2024-01-02"], dtype="datetime64[D]"), AxisKind.temporal),
        (pd.Series([1.5, 2.5, 3.5]), AxisKind.numeric),
        ([1, 2, 3], AxisKind.numeric),
        (["a", "b"], AxisKind.unsupported),
        (pd.Series([True, False]), AxisKind.unsupported),
        ([True, False], AxisKind.unsupported),
        ([date(2024, 1, 1), 3], AxisKind.unsupported),
        ("2024-01-01", AxisKind.unsupported),
        (42, AxisKind.unsupported),
        ([], AxisKind.unsupported),
    ],
)
def test_detect_axis_kind(values: object, expected: AxisKind) -> None:
    assert detect_axis_kind(values) == expected


def test_detect_axis_kind_accepts_date_strings_when_enabled() -> None:
    values = ["01-01-2024", "01-02-2024"]
    assert detect_axis_kind(values) == AxisKind.unsupported
    assert detect_axis_kind(values, parse_date_strings=True) == AxisKind.temporal


def test_normalize_temporal_mixes_dates_and_timestamps() -> None:
    result = normalize_temporal(
        [date(2024, 1, 1), datetime(2024, 1, 2, 12, 0), None, "not a date", pd.NaT]
    )

    assert list(result.values) == [
        pd.Timestamp("2024-01-01 00:00"),
        pd.Timestamp("2024-01-02 12:00"),
    ]
    assert result.dropped == 3
    assert result.count == 2
    assert str(result.values.dtype) == "datetime64[ns]"


def test_normalize_temporal_preserves_input_order() -> None:
    result = normalize_temporal([date(2024, 3, 1), date(2024, 1, 1), date(2024, 2, 1)])
    assert list(result.values.month) == [3, 1, 2]


def test_normalize_temporal_converts_aware_values_to_local_wall_clock() -> None:
    aware = normalize_temporal([pd.Timestamp("2024-06-01 10:00", tz="UTC")])
    assert aware.values[0] == pd.Timestamp("2024-06-01 12:00")
    assert aware.values.tz is None

    series = pd.Series(pd.date_range("2024-01-01", periods=3, freq="D", tz="UTC"))
    converted = normalize_temporal(series, timezone="Europe/Copenhagen")
    assert converted.values[0] == pd.Timestamp("2024-01-01 01:00")
    assert converted.dropped == 0


def test_normalize_temporal_is_exact_for_equal_instants() -> None:
    left = normalize_temporal([date(2024, 5, 1)]).values[0]
    right = normalize_temporal(np.array(["2024-05-01"], dtype="datetime64[s]")).values[0]
    assert left == right


def test_parse_danish_dates_prefers_day_first() -> None:
    parsed = parse_danish_dates(["01-02-2024", "15-03-2024", "31-12-2024"])
    assert list(parsed) == [
        pd.Timestamp("2024-02-01"),
        pd.Timestamp("2024-03-15"),
        pd.Timestamp("2024-12-31"),
    ]


def test_parse_danish_dates_falls_back_to_iso() -> None:
    parsed = parse_danish_dates(["2024-01-15", "2024-02-15", "garbage"])
    assert parsed[0] == pd.Timestamp("2024-01-15")
    assert parsed[1] == pd.Timestamp("2024-02-15")
    assert pd.isna(parsed[2])


def test_normalize_temporal_parses_strings_when_enabled() -> None:
    result = normalize_temporal(["15-01-2024", "15-02-2024", ""], parse_date_strings=True)
    assert list(result.values) == [pd.Timestamp("2024-01-15"), pd.Timestamp("2024-02-15")]
    assert result.dropped == 1
