from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import typer

from spc_axis.axis import AxisFormat, format_axis
from spc_axis.config import DEFAULT_CONFIG_PATH, AxisConfig, load_config
from spc_axis.io.read import load_axis_column, load_table, maybe_parse_dates
from spc_axis.logging import configure_logging
from spc_axis.temporal.normalize import AxisKind
from spc_axis.viz.run_chart import plot_run_chart

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AxisConfig:
    if config_path is not None:
        return load_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AxisConfig()


def _format_tick(axis_format: AxisFormat, tick: object) -> str:
    if axis_format.kind == AxisKind.temporal:
        return pd.Timestamp(tick).isoformat()
    return f"{float(tick):g}"


def _describe(axis_format: AxisFormat) -> list[str]:
    lines = [f"kind: {axis_format.kind.value}"]
    if axis_format.is_passthrough:
        lines.append("axis left unchanged (values are neither temporal nor numeric)")
        return lines

    profile = axis_format.profile
    if profile is not None:
        median = (
            "n/a" if math.isnan(profile.median_gap_days) else f"{profile.median_gap_days:.2f}"
        )
        lines.extend(
            [
                f"interval: {profile.type.value}",
                f"median gap (days): {median}",
                f"consistency: {profile.consistency:.2f}",
                f"timespan (days): {profile.timespan_days:.1f}",
                f"observations: {profile.observation_count}",
            ]
        )
    plan = axis_format.plan
    if plan is not None:
        labels = "adaptive" if plan.uses_adaptive_labels else f"pattern {plan.label_pattern!r}"
        granularity = str(plan.granularity) if plan.granularity is not None else "n/a"
        lines.extend(
            [
                f"labels: {labels}",
                f"granularity: {granularity}",
                f"target breaks: {plan.target_breaks}",
            ]
        )
    for note in axis_format.notes:
        lines.append(f"note: {note.value}")

    breaks = axis_format.breaks if axis_format.breaks is not None else []
    lines.append(f"breaks ({len(breaks)}):")
    for tick, label in zip(breaks, axis_format.labels):
        lines.append(f"  {_format_tick(axis_format, tick)}  {label.replace(chr(10), ' / ')}")
    return lines


def _require_column(path: Path, column: str, parse_dates: bool) -> pd.Series:
    try:
        return load_axis_column(path, column, parse_dates=parse_dates)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def profile(
    csv: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    column: str = typer.Option(..., help="Column holding the x-axis values."),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    parse_dates: bool = typer.Option(
        True, help="Parse text columns as Danish (dd-mm-yyyy) or ISO dates."
    ),
    log_level: str = typer.Option(
        "INFO", help="Logging level, e.g. DEBUG to trace interval detection."
    ),
) -> None:
    """Print the interval profile, format plan and breaks for one CSV column."""
    configure_logging(log_level)
    cfg = _load_app_config(config)
    values = _require_column(csv, column, parse_dates)
    axis_format = format_axis(values, config=cfg)
    typer.echo("\n".join(_describe(axis_format)))


@app.command()
def render(
    csv: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    x: str = typer.Option(..., help="Column holding the x-axis values."),
    y: str = typer.Option(..., help="Column holding the measured values."),
    out: Path = typer.Option(Path("out/run_chart.png"), resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    parse_dates: bool = typer.Option(
        True, help="Parse text x values as Danish (dd-mm-yyyy) or ISO dates."
    ),
    title: str | None = typer.Option(None),
    log_level: str = typer.Option(
        "INFO", help="Logging level, e.g. DEBUG to trace interval detection."
    ),
) -> None:
    """Render a run chart PNG using the adaptive x-axis."""
    configure_logging(log_level)
    cfg = _load_app_config(config)
    frame = load_table(csv)
    for column in (x, y):
        if column not in frame.columns:
            raise typer.BadParameter(f"Column {column!r} not found in {csv.name}")
    if parse_dates:
        frame[x] = maybe_parse_dates(frame[x])
    output_path, axis_format = plot_run_chart(
        frame=frame, x=x, y=y, output_path=out, config=cfg, title=title
    )
    typer.echo(f"Run chart written to: {output_path} ({axis_format.kind.value} x-axis)")


if __name__ == "__main__":
    app()
