from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from spc_axis.axis import AxisFormat, format_axis
from spc_axis.config import AxisConfig
from spc_axis.temporal.normalize import AxisKind
from spc_axis.viz.axis import apply_x_axis
from spc_axis.viz.common import save_figure


def plot_run_chart(
    frame: pd.DataFrame,
    x: str,
    y: str,
    output_path: Path,
    config: AxisConfig | None = None,
    title: str | None = None,
) -> tuple[Path, AxisFormat]:
    axis_format = format_axis(frame[x], config=config)

    x_values = frame[x]
    if axis_format.kind == AxisKind.temporal:
        x_values = pd.to_datetime(x_values, errors="coerce")
    y_values = pd.to_numeric(frame[y], errors="coerce")
    centre = float(y_values.median()) if y_values.notna().any() else float("nan")

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(x_values, y_values, marker="o", linewidth=1.2, markersize=3, color="#1f4e79")
    if pd.notna(centre):
        ax.axhline(centre, color="#4d4d4d", linewidth=1.0, linestyle="--", label="Median")
    apply_x_axis(ax, axis_format)
    ax.set_title(title or y)
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    return save_figure(fig, output_path), axis_format
