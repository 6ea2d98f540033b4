from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)

SECONDS_PER_DAY = 86_400.0


class IntervalType(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"
    irregular = "irregular"
    insufficient_data = "insufficient_data"


# Inclusive upper bounds on the median gap (days), first match wins.
INTERVAL_THRESHOLDS: tuple[tuple[float, IntervalType], ...] = (
    (1.0, IntervalType.daily),
    (10.0, IntervalType.weekly),
    (40.0, IntervalType.monthly),
    (120.0, IntervalType.quarterly),
    (400.0, IntervalType.yearly),
)


@dataclass(frozen=True)
class IntervalProfile:
    type: IntervalType
    median_gap_days: float
    consistency: float
    timespan_days: float
    observation_count: int

    @property
    def is_insufficient(self) -> bool:
        return self.type == IntervalType.insufficient_data


def insufficient_profile(observation_count: int) -> IntervalProfile:
    return IntervalProfile(
        type=IntervalType.insufficient_data,
        median_gap_days=float("nan"),
        consistency=0.0,
        timespan_days=0.0,
        observation_count=observation_count,
    )


def classify_median_gap(median_gap_days: float) -> IntervalType:
    for upper_bound, interval_type in INTERVAL_THRESHOLDS:
        if median_gap_days <= upper_bound:
            return interval_type
    return IntervalType.irregular


def consistency_score(gaps_days: np.ndarray, median_gap_days: float) -> float:
    """Return ``1 - std(gaps) / median`` clamped into [0, 1].

    A single gap has no spread. A zero or undefined median scores 0.
    """
    if not math.isfinite(median_gap_days) or median_gap_days == 0.0:
        return 0.0
    spread = float(np.std(gaps_days, ddof=1)) if gaps_days.size >= 2 else 0.0
    score = 1.0 - (spread / median_gap_days)
    if not math.isfinite(score):
        return 0.0
    return float(min(1.0, max(0.0, score)))


def gaps_in_days(sorted_values: pd.DatetimeIndex) -> np.ndarray:
    nanoseconds = np.diff(sorted_values.as_unit("ns").asi8).astype(float)
    return nanoseconds / (SECONDS_PER_DAY * 1e9)


def detect_interval(values: pd.DatetimeIndex) -> IntervalProfile:
    """Profile the dominant spacing of already-normalized temporal values."""
    valid = values[~values.isna()]
    count = len(valid)
    if count < 2:
        LOGGER.debug("Interval detection needs two observations, got %d", count)
        return insufficient_profile(count)

    ordered = valid.sort_values()
    timespan_days = (ordered[-1] - ordered[0]).total_seconds() / SECONDS_PER_DAY
    if timespan_days == 0.0:
        LOGGER.debug("All %d observations share one timestamp", count)
        return insufficient_profile(count)

    gaps = gaps_in_days(ordered)
    median_gap_days = float(np.median(gaps))
    return IntervalProfile(
        type=classify_median_gap(median_gap_days),
        median_gap_days=median_gap_days,
        consistency=consistency_score(gaps, median_gap_days),
        timespan_days=float(timespan_days),
        observation_count=count,
    )
