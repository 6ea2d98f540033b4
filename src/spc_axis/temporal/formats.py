from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

import pandas as pd

from spc_axis.temporal.intervals import IntervalProfile, IntervalType

GranularityUnit = Literal["day", "week", "month", "year"]

UNIT_SECONDS: dict[str, float] = {
    "day": 86_400.0,
    "week": 604_800.0,
    # Same 30-day approximation the monthly base interval uses.
    "month": 2_592_000.0,
    "year": 31_536_000.0,
}


@dataclass(frozen=True)
class Granularity:
    count: int
    unit: GranularityUnit

    @property
    def approx_seconds(self) -> float:
        return self.count * UNIT_SECONDS[self.unit]

    @property
    def is_calendar(self) -> bool:
        return self.unit in ("month", "year")

    def offset(self) -> pd.DateOffset | pd.Timedelta:
        if self.unit == "month":
            return pd.DateOffset(months=self.count)
        if self.unit == "year":
            return pd.DateOffset(years=self.count)
        if self.unit == "week":
            return pd.Timedelta(weeks=self.count)
        return pd.Timedelta(days=self.count)

    def __str__(self) -> str:
        suffix = "" if self.count == 1 else "s"
        return f"{self.count} {self.unit}{suffix}"


@dataclass(frozen=True)
class AdaptiveLabelStyle:
    """Per-component patterns for short adaptive labels; ``None`` disables a component."""

    year: str | None = "%Y"
    month: str | None = "%b"
    day: str | None = "%d"
    time: str | None = "%H:%M"
    sep: str = "\n"


SHORT_LABELS = AdaptiveLabelStyle()
YEAR_MONTH_LABELS = AdaptiveLabelStyle(day=None, time=None)
YEAR_ONLY_LABELS = AdaptiveLabelStyle(month="", day="", time=None, sep="")

ONE_WEEK = Granularity(1, "week")
TWO_WEEKS = Granularity(2, "week")
ONE_MONTH = Granularity(1, "month")
TWO_MONTHS = Granularity(2, "month")
THREE_MONTHS = Granularity(3, "month")
SIX_MONTHS = Granularity(6, "month")
ONE_YEAR = Granularity(1, "year")


@dataclass(frozen=True)
class FormatPlan:
    target_breaks: int
    label_pattern: str | None = None
    adaptive: AdaptiveLabelStyle | None = None
    granularity: Granularity | None = None

    @property
    def uses_adaptive_labels(self) -> bool:
        return self.adaptive is not None


def _daily_plan(profile: IntervalProfile) -> FormatPlan:
    n_obs = profile.observation_count
    if n_obs < 30:
        return FormatPlan(label_pattern="%d %b", granularity=ONE_WEEK, target_breaks=8)
    if n_obs < 90:
        return FormatPlan(label_pattern="%b %Y", granularity=TWO_WEEKS, target_breaks=10)
    return FormatPlan(label_pattern="%b %Y", granularity=ONE_MONTH, target_breaks=12)


def _weekly_plan(profile: IntervalProfile) -> FormatPlan:
    n_obs = profile.observation_count
    if n_obs <= 36:
        return FormatPlan(adaptive=SHORT_LABELS, target_breaks=min(n_obs, 24))
    # Too many weeks to label individually; switch to a monthly axis.
    return FormatPlan(label_pattern="%b %Y", granularity=ONE_MONTH, target_breaks=12)


def _monthly_plan(profile: IntervalProfile) -> FormatPlan:
    n_obs = profile.observation_count
    if n_obs < 12:
        return FormatPlan(adaptive=YEAR_MONTH_LABELS, granularity=ONE_MONTH, target_breaks=n_obs)
    if n_obs < 40:
        return FormatPlan(adaptive=SHORT_LABELS, granularity=THREE_MONTHS, target_breaks=8)
    return FormatPlan(adaptive=YEAR_ONLY_LABELS, granularity=SIX_MONTHS, target_breaks=10)


def _quarterly_plan(profile: IntervalProfile) -> FormatPlan:
    return FormatPlan(label_pattern="Q%q %Y", granularity=THREE_MONTHS, target_breaks=8)


def _yearly_plan(profile: IntervalProfile) -> FormatPlan:
    return FormatPlan(
        label_pattern="%Y",
        granularity=ONE_YEAR,
        target_breaks=min(profile.observation_count, 10),
    )


def _irregular_plan(profile: IntervalProfile) -> FormatPlan:
    timespan_days = profile.timespan_days
    if timespan_days < 100:
        return FormatPlan(label_pattern="%d %b %Y", granularity=TWO_WEEKS, target_breaks=8)
    if timespan_days < 730:
        return FormatPlan(label_pattern="%b %Y", granularity=TWO_MONTHS, target_breaks=10)
    return FormatPlan(label_pattern="%Y", granularity=ONE_YEAR, target_breaks=12)


PLAN_BUILDERS: dict[IntervalType, Callable[[IntervalProfile], FormatPlan]] = {
    IntervalType.daily: _daily_plan,
    IntervalType.weekly: _weekly_plan,
    IntervalType.monthly: _monthly_plan,
    IntervalType.quarterly: _quarterly_plan,
    IntervalType.yearly: _yearly_plan,
    IntervalType.irregular: _irregular_plan,
    IntervalType.insufficient_data: _irregular_plan,
}


def select_format_plan(profile: IntervalProfile) -> FormatPlan:
    return PLAN_BUILDERS[profile.type](profile)
