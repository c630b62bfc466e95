from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _segments(slices: List[ScheduledSlice]) -> Iterator[Tuple[Optional[str], int, int]]:
    """
    Yield (pid, width, end_time) for each run in time order; pid is None
    for an idle gap.
    """
    last_time = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            yield None, sl.start_time - last_time, sl.start_time
        yield sl.pid, max(1, sl.end_time - sl.start_time), sl.end_time
        last_time = sl.end_time


def _time_marks(slices: List[ScheduledSlice]) -> str:
    marks = "0"
    for _, width, end_time in _segments(slices):
        mark = str(end_time)
        marks += mark.rjust(width) if width >= len(mark) else " " + mark
    return marks


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart. Idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = " "
    for pid, width, _ in _segments(slices):
        if pid is None:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += pid[:width].ljust(width)
    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, _time_marks(slices)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[str, str] = {}
    timeline = Text()
    labels = Text()

    for pid, width, _ in _segments(slices):
        if pid is None:
            timeline.append(" " * width)
            labels.append(" " * width)
            continue
        color = pid_to_color.setdefault(pid, _COLORS[len(pid_to_color) % len(_COLORS)])
        timeline.append(" " * width, style=f"on {color}")
        labels.append(pid[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), _time_marks(slices)
