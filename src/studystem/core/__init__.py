"""Pure calendar logic: visibility, month grid, and chronological list."""

from .month_grid import (
    GRID_CELLS,
    WEEKDAY_HEADERS,
    DayCell,
    GridEvent,
    MonthGrid,
    build_month_grid,
    local_day,
    shift_month,
    time_label,
)
from .timeline import TimelineEntry, build_timeline
from .visibility import filter_visible, is_visible, owner_column

__all__ = [
    "DayCell",
    "GRID_CELLS",
    "GridEvent",
    "MonthGrid",
    "TimelineEntry",
    "WEEKDAY_HEADERS",
    "build_month_grid",
    "build_timeline",
    "filter_visible",
    "is_visible",
    "local_day",
    "owner_column",
    "shift_month",
    "time_label",
]
