# src/leverlog/ui/heatmap.py
# ----------------------------------------------------------------------
# 30-day activity heatmap: one square per day, columns are weeks since
# the window start, rows are weekdays (Sunday on top). Color runs from a
# faint white for no time to green for the busiest day.
# ----------------------------------------------------------------------

from __future__ import annotations
from typing import List, Optional

import numpy as np
from PySide6 import QtWidgets
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from ..analysis.history_stats import format_spoken, heatmap_grid, max_daily_total
from ..data_models import DailyTensionData

# days outside the window stay transparent
_CMAP = LinearSegmentedColormap.from_list(
    "tension", [(1.0, 1.0, 1.0, 0.3), (0.0, 0.5, 0.0, 1.0)]
).with_extremes(bad=(0, 0, 0, 0))

WEEKDAY_LABELS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class HeatmapCanvas(FigureCanvas):
    """Matplotlib canvas that redraws from a list of DailyTensionData cells."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        self.fig = Figure(figsize=(2.5, 3.5), tight_layout=True)
        super().__init__(self.fig)
        self.setParent(parent)
        self.ax = self.fig.add_subplot(111)
        self._cells: List[DailyTensionData] = []
        self.setToolTip("30-Day Activity Heatmap")
        self.setMouseTracking(True)          # hover tooltips per day

    def set_cells(self, cells: List[DailyTensionData]) -> None:
        self._cells = list(cells)
        ax = self.ax
        ax.clear()
        grid = heatmap_grid(self._cells)
        vmax = max(max_daily_total(self._cells), 1e-6)   # all-zero window still renders
        ax.imshow(np.ma.masked_invalid(grid), cmap=_CMAP, vmin=0.0, vmax=vmax,
                  aspect="equal", origin="upper", interpolation="nearest")
        # grid lines between cells
        ax.set_xticks(np.arange(-0.5, grid.shape[1], 1.0), minor=True)
        ax.set_yticks(np.arange(-0.5, 7, 1.0), minor=True)
        ax.grid(which="minor", color="#cccccc", linewidth=0.5)
        ax.tick_params(which="both", length=0, labelbottom=False, labelleft=False)
        for spine in ax.spines.values():
            spine.set_visible(False)
        self.setAccessibleDescription("\n".join(self.describe()))
        self.draw_idle()

    def describe(self) -> List[str]:
        """Accessible one-line description per day (date + time under tension)."""
        return [
            f"{c.date.strftime('%A, %B %d, %Y')}: {format_spoken(c.total_time)} under tension"
            for c in self._cells
        ]

    def cell_at(self, pos) -> Optional[DailyTensionData]:
        """Cell under a widget position (logical Qt pixels), or None."""
        # mouseEventCoords flips y and scales to physical pixels for HiDPI screens
        x, y = self.mouseEventCoords(pos)
        xdata, ydata = self.ax.transData.inverted().transform((x, y))
        week, weekday = int(round(xdata)), int(round(ydata))
        return next((c for c in self._cells if c.week == week and c.weekday == weekday), None)

    def mouseMoveEvent(self, ev) -> None:
        cell = self.cell_at(ev.position())
        if cell is not None:
            QtWidgets.QToolTip.showText(ev.globalPosition().toPoint(),
                                        f"{WEEKDAY_LABELS[cell.weekday]} {cell.date:%b %d}: {format_spoken(cell.total_time)}",
                                        self)
        super().mouseMoveEvent(ev)
