from __future__ import annotations

import datetime as dt
import logging
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)

DANISH_DATE_FORMAT = "%d-%m-%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEZONE = "Europe/Copenhagen"


class AxisKind(str, Enum):
    temporal = "temporal"
    numeric = "numeric"
    unsupported = "unsupported"


@dataclass(frozen=True)
class NormalizedSeries:
    values: pd.DatetimeIndex
    dropped: int

    @property
    def count(self) -> int:
        return len(self.values)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _is_temporal_scalar(value: Any) -> bool:
    # datetime.datetime and pd.Timestamp are both date subclasses.
    return isinstance(value, (dt.date, np.datetime64))


def _is_numeric_scalar(value: Any) -> bool:
    return isinstance(value, (numbers.Real, np.number)) and not isinstance(value, (bool, np.bool_))


def _is_array_like(values: Any) -> bool:
    return isinstance(values, (pd.Series, pd.Index, np.ndarray))


def detect_axis_kind(values: Any, parse_date_strings: bool = False) -> AxisKind:
    """Classify an axis input as temporal, numeric or unsupported."""
    if isinstance(values, (str, bytes, dict)) or not isinstance(values, Iterable):
        return AxisKind.unsupported

    if _is_array_like(values):
        dtype = values.dtype
        if pd.api.types.is_datetime64_any_dtype(dtype):
            return AxisKind.temporal
        if pd.api.types.is_bool_dtype(dtype):
            return AxisKind.unsupported
        if pd.api.types.is_numeric_dtype(dtype):
            return AxisKind.numeric

    present = [value for value in values if not _is_missing(value)]
    if not present:
        return AxisKind.unsupported
    if all(_is_temporal_scalar(value) for value in present):
        return AxisKind.temporal
    if all(_is_numeric_scalar(value) for value in present):
        return AxisKind.numeric
    if parse_date_strings and all(isinstance(value, str) for value in present):
        return AxisKind.temporal
    return AxisKind.unsupported


def parse_danish_dates(date_strings: Iterable[Any]) -> pd.DatetimeIndex:
    """Parse ``dd-mm-yyyy`` strings, falling back to ISO dates when none match."""
    series = pd.Series(list(date_strings), dtype="object")
    parsed = pd.to_datetime(series, format=DANISH_DATE_FORMAT, errors="coerce")
    if parsed.isna().all():
        parsed = pd.to_datetime(series, format=ISO_DATE_FORMAT, errors="coerce")
    return pd.DatetimeIndex(parsed)


def _coerce_timestamp(value: Any, timezone: str) -> pd.Timestamp:
    if _is_missing(value):
        return pd.NaT
    try:
        stamp = pd.Timestamp(value)
    except (TypeError, ValueError):
        return pd.NaT
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(timezone).tz_localize(None)
    return stamp


def normalize_temporal(
    values: Any,
    timezone: str = DEFAULT_TIMEZONE,
    parse_date_strings: bool = False,
) -> NormalizedSeries:
    """Coerce dates and timestamps into one tz-naive nanosecond DatetimeIndex.

    Timezone-aware values are expressed as wall-clock time in ``timezone``.
    Missing or unparseable entries are dropped and counted; input order is kept.
    """
    if _is_array_like(values) and pd.api.types.is_datetime64_any_dtype(values.dtype):
        index = pd.DatetimeIndex(values)
        if index.tz is not None:
            index = index.tz_convert(timezone).tz_localize(None)
    else:
        items = list(values)
        present = [item for item in items if not _is_missing(item)]
        if parse_date_strings and present and all(isinstance(item, str) for item in present):
            index = parse_danish_dates(items)
        else:
            index = pd.DatetimeIndex([_coerce_timestamp(item, timezone) for item in items])

    index = index.as_unit("ns")
    valid = index[~index.isna()]
    dropped = len(index) - len(valid)
    if dropped:
        LOGGER.debug("Dropped %d missing or invalid temporal entries", dropped)
    return NormalizedSeries(values=valid, dropped=dropped)
