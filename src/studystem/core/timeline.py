from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from ..domain import SessionEvent


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    event: SessionEvent
    is_past: bool


def build_timeline(events: Iterable[SessionEvent], *, now: datetime) -> List[TimelineEntry]:
    """Order events by start time, ties broken by id, and flag the ones already begun."""

    ordered = sorted(events, key=lambda item: (item.starts_at, item.id))
    return [TimelineEntry(event=item, is_past=item.starts_at < now) for item in ordered]
