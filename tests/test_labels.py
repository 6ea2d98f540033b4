from __future__ import annotations

import pandas as pd

from spc_axis.labels import AdaptiveLabeler, PatternLabeler, adaptive_labels, format_tick
from spc_axis.temporal.formats import SHORT_LABELS, YEAR_MONTH_LABELS, YEAR_ONLY_LABELS


def _monthly_ticks() -> pd.DatetimeIndex:
    return pd.date_range("2024-01-01", "2025-01-01", freq="MS")


def test_format_tick_uses_locale_months_and_quarters() -> None:
    assert format_tick(pd.Timestamp("2024-05-10"), "%d %b") == "10 maj"
    assert format_tick(pd.Timestamp("2024-05-10"), "%d %b", locale="en") == "10 May"
    assert format_tick(pd.Timestamp("2024-10-01"), "%b %Y") == "okt 2024"
    assert format_tick(pd.Timestamp("2024-08-01"), "Q%q %Y") == "Q3 2024"
    assert format_tick(pd.Timestamp("2024-03-09"), "%d %b %Y") == "09 mar 2024"


def test_adaptive_labels_repeat_year_only_on_change() -> None:
    labels = adaptive_labels(_monthly_ticks(), SHORT_LABELS)

    assert labels[0] == "jan\n2024"
    assert labels[1] == "feb"
    assert labels[11] == "dec"
    assert labels[12] == "jan\n2025"


def test_year_month_style_matches_short_style_for_month_starts() -> None:
    assert adaptive_labels(_monthly_ticks(), YEAR_MONTH_LABELS) == adaptive_labels(
        _monthly_ticks(), SHORT_LABELS
    )


def test_year_only_style_blanks_months() -> None:
    labels = adaptive_labels(_monthly_ticks(), YEAR_ONLY_LABELS)

    assert labels[0] == "2024"
    assert labels[1:12] == [""] * 11
    assert labels[12] == "2025"


def test_adaptive_labels_show_days_for_weekly_ticks() -> None:
    ticks = pd.date_range("2024-01-01", "2024-02-05", freq="7D")
    labels = adaptive_labels(ticks, SHORT_LABELS, locale="en")

    assert labels[0] == "01\nJan\n2024"
    assert labels[1] == "08"
    assert labels[-1] == "05\nFeb"


def test_adaptive_labels_drop_month_when_every_tick_is_january_first() -> None:
    ticks = pd.DatetimeIndex([pd.Timestamp(f"{year}-01-01") for year in (2020, 2021, 2022)])
    assert adaptive_labels(ticks, SHORT_LABELS) == ["2020", "2021", "2022"]


def test_adaptive_labels_keep_time_for_intraday_ticks() -> None:
    ticks = pd.DatetimeIndex([pd.Timestamp("2024-01-01 00:00"), pd.Timestamp("2024-01-01 12:00")])
    labels = adaptive_labels(ticks, SHORT_LABELS)

    assert labels == ["00:00\n01\njan\n2024", "12:00"]


def test_labelers_are_callable_on_break_sets() -> None:
    ticks = _monthly_ticks()[:2]

    assert AdaptiveLabeler(SHORT_LABELS)(ticks) == ["jan\n2024", "feb"]
    assert PatternLabeler("%b %Y", locale="en")(ticks) == ["Jan 2024", "Feb 2024"]
    assert adaptive_labels([], SHORT_LABELS) == []
