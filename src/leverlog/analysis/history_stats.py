# src/leverlog/analysis/history_stats.py
# Aggregates behind the History screen: totals, per-day grouping and the 30-day heatmap.
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..config import HEATMAP_DAYS
from ..data_models import DailyTensionData, HistorySummary, WorkoutEntry


def today_total(entries: Iterable[WorkoutEntry], today: date) -> float:
    """Seconds under tension logged on `today` (local calendar day)."""
    return float(sum(e.time_under_tension for e in entries if e.day() == today))

def daily_average(entries: Sequence[WorkoutEntry]) -> float:
    """
    Total seconds divided by the number of distinct days that have entries.
    Days without entries are not counted, so this is "average per active day".
    """
    if not entries:
        return 0.0
    days = {e.day() for e in entries}
    return float(np.sum([e.time_under_tension for e in entries])) / len(days)

def grouped_entries(entries: Iterable[WorkoutEntry]) -> List[Tuple[date, List[WorkoutEntry]]]:
    """[(day, entries)] with the most recent day first; input order kept inside a day."""
    groups: "OrderedDict[date, List[WorkoutEntry]]" = OrderedDict()
    for e in entries:
        groups.setdefault(e.day(), []).append(e)
    return sorted(groups.items(), key=lambda kv: kv[0], reverse=True)

def heatmap_data(entries: Iterable[WorkoutEntry], today: date,
                 days: int = HEATMAP_DAYS) -> List[DailyTensionData]:
    """
    One cell per day from today-(days-1) through today.

    weekday: 0 = Sunday .. 6 = Saturday
    week:    day offset from the window start // 7
    """
    start = today - timedelta(days=days - 1)
    totals: Dict[date, float] = {}
    for e in entries:
        d = e.day()
        if start <= d <= today:
            totals[d] = totals.get(d, 0.0) + e.time_under_tension

    cells = []
    for offset in range(days):
        d = start + timedelta(days=offset)
        cells.append(DailyTensionData(
            date=d,
            weekday=(d.isoweekday() % 7),   # isoweekday: Mon=1..Sun=7
            week=offset // 7,
            total_time=totals.get(d, 0.0),
        ))
    return cells

def heatmap_grid(cells: Sequence[DailyTensionData]) -> np.ndarray:
    """(7, n_weeks) array of totals indexed [weekday, week]; NaN where the window has no day."""
    n_weeks = (max(c.week for c in cells) + 1) if cells else 0
    grid = np.full((7, n_weeks), np.nan, dtype=float)
    for c in cells:
        grid[c.weekday, c.week] = c.total_time
    return grid

def max_daily_total(cells: Sequence[DailyTensionData]) -> float:
    if not cells:
        return 1.0
    return float(np.max([c.total_time for c in cells]))

def summarize(entries: Sequence[WorkoutEntry], today: date) -> HistorySummary:
    cells = heatmap_data(entries, today)
    return HistorySummary(
        today_total=today_total(entries, today),
        daily_average=daily_average(entries),
        max_daily_total=max_daily_total(cells),
        heatmap=cells,
    )

# --- FORMATTING ---

def format_short(seconds: float) -> str:
    """MM:SS, used for totals and entry cards."""
    s = int(seconds)
    return "%02d:%02d" % (s // 60, s % 60)

def format_spoken(seconds: float) -> str:
    """Heatmap cell label: 'No time', '1m 5s' or '42s'."""
    if seconds == 0:
        return "No time"
    s = int(seconds)
    minutes, secs = s // 60, s % 60
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
