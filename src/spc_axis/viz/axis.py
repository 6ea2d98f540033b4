from __future__ import annotations

import matplotlib.dates as mdates
import numpy as np
from matplotlib.axes import Axes

from spc_axis.axis import AxisFormat
from spc_axis.temporal.normalize import AxisKind


def tick_positions(axis_format: AxisFormat) -> np.ndarray:
    """Break positions in matplotlib data coordinates."""
    if axis_format.breaks is None or len(axis_format.breaks) == 0:
        return np.array([], dtype=float)
    if axis_format.kind == AxisKind.temporal:
        return np.asarray(mdates.date2num(axis_format.breaks.to_pydatetime()), dtype=float)
    return np.asarray(axis_format.breaks, dtype=float)


def apply_x_axis(ax: Axes, axis_format: AxisFormat) -> Axes:
    if axis_format.is_passthrough:
        return ax
    positions = tick_positions(axis_format)
    if positions.size == 0:
        return ax
    ax.set_xticks(positions)
    ax.set_xticklabels(list(axis_format.labels))
    if axis_format.plan is not None and axis_format.plan.uses_adaptive_labels:
        # Smart-label axes use a tighter horizontal expansion.
        ax.margins(x=0.025)
    return ax
