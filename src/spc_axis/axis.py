from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from collections.abc import Sized
from typing import Any, Iterable

import numpy as np
import pandas as pd
from matplotlib.ticker import MaxNLocator

from spc_axis.config import AxisConfig
from spc_axis.labels import AdaptiveLabeler, PatternLabeler
from spc_axis.temporal.breaks import base_interval_seconds, calculate_breaks, pretty_date_breaks
from spc_axis.temporal.formats import FormatPlan, select_format_plan
from spc_axis.temporal.intervals import IntervalProfile, detect_interval
from spc_axis.temporal.normalize import AxisKind, detect_axis_kind, normalize_temporal

LOGGER = logging.getLogger(__name__)

NUMERIC_TARGET_BREAKS = 8
PRETTY_STEPS = [1, 2, 2.5, 5, 10]


class AxisNote(str, Enum):
    insufficient_data = "insufficient_data"
    unresolvable_granularity = "unresolvable_granularity"
    unsupported_input_kind = "unsupported_input_kind"
    dropped_invalid_entries = "dropped_invalid_entries"


@dataclass(frozen=True, eq=False)
class AxisFormat:
    kind: AxisKind
    breaks: pd.DatetimeIndex | np.ndarray | None = None
    labels: tuple[str, ...] = ()
    labeler: AdaptiveLabeler | PatternLabeler | None = None
    profile: IntervalProfile | None = None
    plan: FormatPlan | None = None
    notes: tuple[AxisNote, ...] = ()
    values: Any = None

    @property
    def label_pattern(self) -> str | None:
        if self.plan is None:
            return None
        return self.plan.label_pattern

    @property
    def is_passthrough(self) -> bool:
        return self.kind == AxisKind.unsupported


def pretty_numeric_breaks(values: Iterable[Any], target: int = NUMERIC_TARGET_BREAKS) -> np.ndarray:
    array = pd.to_numeric(pd.Series(list(values), dtype="object"), errors="coerce").to_numpy(
        dtype=float
    )
    array = array[np.isfinite(array)]
    if array.size == 0:
        return np.array([], dtype=float)
    vmin, vmax = float(array.min()), float(array.max())
    if vmin == vmax:
        return np.array([vmin], dtype=float)
    locator = MaxNLocator(nbins=max(int(target), 1), steps=PRETTY_STEPS)
    return np.asarray(locator.tick_values(vmin, vmax), dtype=float)


def format_numeric_axis(values: Any, config: AxisConfig) -> AxisFormat:
    breaks = pretty_numeric_breaks(values, target=config.breaks.numeric_target)
    return AxisFormat(
        kind=AxisKind.numeric,
        breaks=breaks,
        labels=tuple(f"{value:g}" for value in breaks),
    )


def format_temporal_axis(values: Any, config: AxisConfig) -> AxisFormat:
    normalized = normalize_temporal(
        values,
        timezone=config.time.timezone,
        parse_date_strings=config.time.parse_date_strings,
    )
    notes: list[AxisNote] = []
    if normalized.dropped:
        notes.append(AxisNote.dropped_invalid_entries)

    profile = detect_interval(normalized.values)
    plan = select_format_plan(profile)
    if profile.is_insufficient:
        notes.append(AxisNote.insufficient_data)
        LOGGER.info(
            "Insufficient temporal data (%d observation(s)); using fallback axis formatting",
            profile.observation_count,
        )
    else:
        LOGGER.debug(
            "Detected %s interval: median gap %.2f days, consistency %.2f, %d observations",
            profile.type.value,
            profile.median_gap_days,
            profile.consistency,
            profile.observation_count,
        )

    locale = config.labels.locale
    if plan.adaptive is not None:
        labeler: AdaptiveLabeler | PatternLabeler = AdaptiveLabeler(plan.adaptive, locale)
    else:
        labeler = PatternLabeler(plan.label_pattern or "%Y-%m-%d", locale)

    if normalized.count == 0:
        breaks = pd.DatetimeIndex([]).as_unit("ns")
    else:
        data_min = normalized.values.min()
        data_max = normalized.values.max()
        granularity = plan.granularity
        if (
            not config.breaks.calendar_breaks_for_coarse_types
            and base_interval_seconds(profile.type) is None
        ):
            granularity = None
        calculated = calculate_breaks(
            data_min,
            data_max,
            profile.type,
            granularity,
            week_start=config.time.week_start,
            max_breaks=config.breaks.max_breaks,
        )
        if calculated is None:
            notes.append(AxisNote.unresolvable_granularity)
            LOGGER.info(
                "No break granularity for %s interval; using pretty breaks (target %d)",
                profile.type.value,
                plan.target_breaks,
            )
            calculated = pretty_date_breaks(data_min, data_max, plan.target_breaks)
        breaks = calculated

    return AxisFormat(
        kind=AxisKind.temporal,
        breaks=breaks,
        labels=tuple(labeler(breaks)),
        labeler=labeler,
        profile=profile,
        plan=plan,
        notes=tuple(notes),
    )


def format_axis(values: Any, config: AxisConfig | None = None) -> AxisFormat:
    """Compute tick positions and labels for one axis.

    Temporal values are classified and get calendar-aligned breaks, numeric
    values get pretty breaks, anything else passes through unchanged.
    """
    if values is None:
        raise TypeError("format_axis() requires a series of axis values, got None")
    if not isinstance(values, Sized) and isinstance(values, Iterable):
        # One-shot iterables are read once here so detection does not consume them.
        values = list(values)
    config = config or AxisConfig()

    kind = detect_axis_kind(values, parse_date_strings=config.time.parse_date_strings)
    if kind == AxisKind.temporal:
        return format_temporal_axis(values, config)
    if kind == AxisKind.numeric:
        return format_numeric_axis(values, config)

    LOGGER.debug("Axis values of type %s left unformatted", type(values).__name__)
    return AxisFormat(
        kind=AxisKind.unsupported,
        values=values,
        notes=(AxisNote.unsupported_input_kind,),
    )
