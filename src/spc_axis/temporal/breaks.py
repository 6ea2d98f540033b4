from __future__ import annotations

import logging
from typing import Literal

import matplotlib.dates as mdates
import pandas as pd

from spc_axis.temporal.formats import Granularity
from spc_axis.temporal.intervals import IntervalType

LOGGER = logging.getLogger(__name__)

WeekStart = Literal["sunday", "monday"]

MAX_BREAKS = 15

BASE_INTERVAL_SECONDS: dict[IntervalType, float] = {
    IntervalType.daily: 86_400.0,
    IntervalType.weekly: 604_800.0,
    IntervalType.monthly: 2_592_000.0,
}

MULTIPLIER_CANDIDATES: dict[IntervalType, tuple[int, ...]] = {
    IntervalType.weekly: (2, 4, 13),
    IntervalType.monthly: (3, 6, 12),
}
DEFAULT_MULTIPLIERS: tuple[int, ...] = (2, 4, 8)

# pandas weekday numbers (Monday == 0)
WEEK_START_WEEKDAY: dict[str, int] = {"monday": 0, "sunday": 6}

_TYPE_ROUNDING_UNIT: dict[IntervalType, str] = {
    IntervalType.monthly: "month",
    IntervalType.weekly: "week",
}


def base_interval_seconds(interval_type: IntervalType) -> float | None:
    return BASE_INTERVAL_SECONDS.get(interval_type)


def interval_multiplier(
    potential_breaks: float,
    interval_type: IntervalType,
    max_breaks: int = MAX_BREAKS,
) -> int:
    """Pick the smallest candidate multiplier that keeps breaks within ``max_breaks``.

    When no candidate is enough the largest one is used and the axis gets
    more than ``max_breaks`` ticks.
    """
    if potential_breaks <= max_breaks:
        return 1
    candidates = MULTIPLIER_CANDIDATES.get(interval_type, DEFAULT_MULTIPLIERS)
    for multiplier in candidates:
        if potential_breaks / multiplier <= max_breaks:
            return multiplier
    return candidates[-1]


def floor_to_unit(stamp: pd.Timestamp, unit: str, week_start: WeekStart = "sunday") -> pd.Timestamp:
    day = stamp.normalize()
    if unit == "year":
        return day.replace(month=1, day=1)
    if unit == "month":
        return day.replace(day=1)
    if unit == "week":
        offset = (day.weekday() - WEEK_START_WEEKDAY[week_start]) % 7
        return day - pd.Timedelta(days=offset)
    return day


def ceil_to_unit(stamp: pd.Timestamp, unit: str, week_start: WeekStart = "sunday") -> pd.Timestamp:
    floored = floor_to_unit(stamp, unit, week_start)
    if floored == stamp:
        return stamp
    if unit == "year":
        return floored + pd.DateOffset(years=1)
    if unit == "month":
        return floored + pd.DateOffset(months=1)
    if unit == "week":
        return floored + pd.Timedelta(weeks=1)
    return floored + pd.Timedelta(days=1)


def round_to_interval_start(
    stamp: pd.Timestamp,
    interval_type: IntervalType,
    week_start: WeekStart = "sunday",
) -> pd.Timestamp:
    unit = _TYPE_ROUNDING_UNIT.get(interval_type)
    if unit is None:
        return stamp
    return floor_to_unit(stamp, unit, week_start)


def _anchor_to_minimum(
    ticks: pd.DatetimeIndex,
    data_min: pd.Timestamp,
    upper: pd.Timestamp | None = None,
) -> pd.DatetimeIndex:
    mask = ticks >= data_min
    if upper is not None:
        mask = mask & (ticks <= upper)
    kept = ticks[mask]
    if len(kept) == 0 or kept[0] != data_min:
        kept = kept.insert(0, data_min)
    return pd.DatetimeIndex(kept.unique()).as_unit("ns")


def _granularity_breaks(
    data_min: pd.Timestamp,
    data_max: pd.Timestamp,
    granularity: Granularity,
    week_start: WeekStart,
) -> pd.DatetimeIndex:
    step = granularity.offset()
    start = floor_to_unit(data_min, granularity.unit, week_start)
    end = data_max + step
    ticks = pd.date_range(start=start, end=end, freq=step)
    return _anchor_to_minimum(ticks, data_min, end)


def _daily_base_seconds(
    timespan_seconds: float,
    granularity: Granularity | None,
    max_breaks: int,
) -> float:
    base = BASE_INTERVAL_SECONDS[IntervalType.daily]
    if timespan_seconds / base / DEFAULT_MULTIPLIERS[-1] <= max_breaks:
        return base
    # Multipliers alone cannot thin out long daily spans; coarsen the base.
    if granularity is not None:
        return max(base, granularity.approx_seconds)
    return BASE_INTERVAL_SECONDS[IntervalType.weekly]


def calculate_breaks(
    data_min: pd.Timestamp,
    data_max: pd.Timestamp,
    interval_type: IntervalType,
    granularity: Granularity | None = None,
    week_start: WeekStart = "sunday",
    max_breaks: int = MAX_BREAKS,
) -> pd.DatetimeIndex | None:
    """Compute calendar-aligned tick positions between ``data_min`` and ``data_max``.

    The result is strictly increasing, starts at ``data_min`` and ends no later
    than one step past ``data_max``. Returns ``None`` when neither the interval
    type nor ``granularity`` defines a step.
    """
    data_min = pd.Timestamp(data_min)
    data_max = pd.Timestamp(data_max)

    timespan_seconds = (data_max - data_min).total_seconds()
    base_seconds = base_interval_seconds(interval_type)
    if base_seconds is None:
        if granularity is None:
            LOGGER.debug("No break step resolvable for interval type %s", interval_type.value)
            return None
        return _granularity_breaks(data_min, data_max, granularity, week_start)
    if interval_type == IntervalType.daily:
        base_seconds = _daily_base_seconds(timespan_seconds, granularity, max_breaks)

    multiplier = interval_multiplier(timespan_seconds / base_seconds, interval_type, max_breaks)

    if interval_type == IntervalType.monthly:
        # Calendar months avoid drift across months of different lengths.
        step: pd.DateOffset | pd.Timedelta = pd.DateOffset(months=multiplier)
        start = round_to_interval_start(data_min, interval_type, week_start)
        end = ceil_to_unit(data_max, "month", week_start) + step
    elif interval_type == IntervalType.weekly:
        step = pd.Timedelta(seconds=base_seconds * multiplier)
        start = round_to_interval_start(data_min, interval_type, week_start)
        end = ceil_to_unit(data_max, "week", week_start) + step
    else:
        step = pd.Timedelta(seconds=base_seconds * multiplier)
        start = data_min
        end = data_max + step

    ticks = pd.date_range(start=start, end=end, freq=step)
    return _anchor_to_minimum(ticks, data_min, data_max + step)


def pretty_date_breaks(
    data_min: pd.Timestamp,
    data_max: pd.Timestamp,
    target: int,
) -> pd.DatetimeIndex:
    """Readable date ticks near ``target`` in count, anchored at ``data_min``."""
    data_min = pd.Timestamp(data_min)
    data_max = pd.Timestamp(data_max)
    if data_max <= data_min:
        return pd.DatetimeIndex([data_min]).as_unit("ns")

    target = max(int(target), 2)
    locator = mdates.AutoDateLocator(minticks=max(2, target // 2), maxticks=target + 1)
    numbers = locator.tick_values(
        data_min.floor("us").tz_localize("UTC").to_pydatetime(),
        data_max.floor("us").tz_localize("UTC").to_pydatetime(),
    )
    ticks = pd.DatetimeIndex(
        [pd.Timestamp(value).tz_convert(None) for value in mdates.num2date(numbers)]
    )
    return _anchor_to_minimum(ticks.as_unit("ns"), data_min)
