"""Month calendar layout.

A month is always rendered as six weeks of seven days starting on Sunday. Days
outside the month pad the first and last week; they carry their day number but
never any events.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from ..domain import SessionEvent

WEEKDAY_HEADERS: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
GRID_CELLS = 42
MAX_TRAILING_CELLS = 14


@dataclass(frozen=True, slots=True)
class GridEvent:
    event: SessionEvent
    label: str


@dataclass(frozen=True, slots=True)
class DayCell:
    day: date
    in_month: bool
    is_today: bool = False
    events: Tuple[GridEvent, ...] = ()

    @property
    def key(self) -> str:
        return self.day.isoformat()

    @property
    def number(self) -> int:
        return self.day.day


@dataclass(frozen=True, slots=True)
class MonthGrid:
    year: int
    month: int
    cells: Tuple[DayCell, ...]
    headers: Tuple[str, ...] = WEEKDAY_HEADERS

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def weeks(self) -> List[Tuple[DayCell, ...]]:
        return [self.cells[index : index + 7] for index in range(0, len(self.cells), 7)]

    def cell_for(self, day: date) -> Optional[DayCell]:
        for cell in self.cells:
            if cell.in_month and cell.day == day:
                return cell
        return None


def shift_month(reference: date, offset: int) -> date:
    """First day of the month ``offset`` whole months away from ``reference``."""

    index = reference.year * 12 + (reference.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def local_day(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def time_label(moment: datetime, tz: Optional[tzinfo] = None) -> str:
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.strftime("%H:%M")


def _bucket_by_day(
    events: Iterable[SessionEvent], year: int, month: int, tz: Optional[tzinfo]
) -> Dict[date, List[SessionEvent]]:
    buckets: Dict[date, List[SessionEvent]] = {}
    for event in events:
        day = local_day(event.starts_at, tz)
        if day.year != year or day.month != month:
            continue
        buckets.setdefault(day, []).append(event)
    return buckets


def build_month_grid(
    events: Iterable[SessionEvent],
    reference: date,
    *,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> MonthGrid:
    year, month = reference.year, reference.month
    first_weekday = (calendar.monthrange(year, month)[0] + 1) % 7
    days_in_month = calendar.monthrange(year, month)[1]
    previous = shift_month(reference, -1)
    days_in_prev_month = calendar.monthrange(previous.year, previous.month)[1]

    cells: List[DayCell] = []
    for number in range(days_in_prev_month - first_weekday + 1, days_in_prev_month + 1):
        cells.append(DayCell(day=date(previous.year, previous.month, number), in_month=False))

    buckets = _bucket_by_day(events, year, month, tz)
    for number in range(1, days_in_month + 1):
        day = date(year, month, number)
        day_events = sorted(buckets.get(day, []), key=lambda item: (item.starts_at, item.id))
        cells.append(
            DayCell(
                day=day,
                in_month=True,
                is_today=day == today,
                events=tuple(GridEvent(event=item, label=time_label(item.starts_at, tz)) for item in day_events),
            )
        )

    following = shift_month(reference, 1)
    trailing = min(GRID_CELLS - len(cells), MAX_TRAILING_CELLS)
    for number in range(1, trailing + 1):
        cells.append(DayCell(day=date(following.year, following.month, number), in_month=False))

    return MonthGrid(year=year, month=month, cells=tuple(cells[:GRID_CELLS]))


__all__ = [
    "DayCell",
    "GRID_CELLS",
    "GridEvent",
    "MonthGrid",
    "WEEKDAY_HEADERS",
    "build_month_grid",
    "local_day",
    "shift_month",
    "time_label",
]
