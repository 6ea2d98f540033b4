from __future__ import annotations

from pathlib import Path

import pandas as pd

from spc_axis.temporal.normalize import parse_danish_dates


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        return pd.read_csv(path, encoding="utf-8-sig")
    raise ValueError(f"Unsupported table file type: {path.suffix}")


def parse_date_column(series: pd.Series) -> pd.Series:
    """Parse Danish or ISO dates, then ISO timestamps; failures become NaT."""
    parsed = pd.Series(parse_danish_dates(series), index=series.index, name=series.name)
    if parsed.isna().all():
        parsed = pd.to_datetime(series, errors="coerce", format="ISO8601")
    return parsed


def maybe_parse_dates(series: pd.Series) -> pd.Series:
    """Return parsed dates for a text column, or the column itself when nothing parses."""
    if not pd.api.types.is_string_dtype(series.dtype):
        return series
    parsed = parse_date_column(series)
    if parsed.notna().any():
        return parsed
    return series


def load_axis_column(path: Path, column: str, parse_dates: bool = False) -> pd.Series:
    frame = load_table(path)
    if column not in frame.columns:
        raise ValueError(f"Column {column!r} not found in {path.name}")
    series = frame[column]
    if parse_dates:
        series = maybe_parse_dates(series)
    return series
