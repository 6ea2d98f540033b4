from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from spc_axis.config import LabelLocale
from spc_axis.temporal.formats import AdaptiveLabelStyle

MONTH_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "da": ("jan", "feb", "mar", "apr", "maj", "jun", "jul", "aug", "sep", "okt", "nov", "dec"),
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def format_tick(tick: pd.Timestamp, pattern: str, locale: LabelLocale = "da") -> str:
    """Render ``tick`` with an strftime pattern plus ``%q`` (quarter) and localized ``%b``."""
    stamp = pd.Timestamp(tick)
    quarter = (stamp.month - 1) // 3 + 1
    month = MONTH_ABBREVIATIONS[locale][stamp.month - 1]
    resolved = pattern.replace("%q", str(quarter)).replace("%b", month)
    return stamp.strftime(resolved)


def _changed(values: np.ndarray) -> np.ndarray:
    flags = np.ones(values.size, dtype=bool)
    flags[1:] = values[1:] != values[:-1]
    return flags


def adaptive_labels(
    ticks: Iterable[pd.Timestamp],
    style: AdaptiveLabelStyle,
    locale: LabelLocale = "da",
) -> list[str]:
    """Short labels that only repeat a component where it changes.

    A change in a coarser component (year) also prints every finer one.
    Components constant across the whole axis at their origin (midnight,
    the 1st, January) are left out.
    """
    stamps = pd.DatetimeIndex(list(ticks))
    if len(stamps) == 0:
        return []

    years = stamps.year.to_numpy()
    months = stamps.month.to_numpy()
    days = stamps.day.to_numpy()

    year_changed = _changed(years)
    month_changed = year_changed | _changed(months)
    day_changed = month_changed | _changed(days)

    year_fmt, month_fmt, day_fmt, time_fmt = style.year, style.month, style.day, style.time
    if bool(np.all((stamps.hour == 0) & (stamps.minute == 0))):
        time_fmt = None
        if bool(np.all(days == 1)):
            day_fmt = None
            if bool(np.all(months == 1)):
                month_fmt = None

    labels: list[str] = []
    for position, stamp in enumerate(stamps):
        parts = [
            year_fmt if year_changed[position] else None,
            month_fmt if month_changed[position] else None,
            day_fmt if day_changed[position] else None,
            time_fmt,
        ]
        pattern = style.sep.join(part for part in reversed(parts) if part)
        labels.append(format_tick(stamp, pattern, locale) if pattern else "")
    return labels


@dataclass(frozen=True)
class AdaptiveLabeler:
    style: AdaptiveLabelStyle
    locale: LabelLocale = "da"

    def __call__(self, ticks: Iterable[pd.Timestamp]) -> list[str]:
        return adaptive_labels(ticks, self.style, self.locale)


@dataclass(frozen=True)
class PatternLabeler:
    pattern: str
    locale: LabelLocale = "da"

    def __call__(self, ticks: Iterable[pd.Timestamp]) -> list[str]:
        return [format_tick(tick, self.pattern, self.locale) for tick in ticks]
