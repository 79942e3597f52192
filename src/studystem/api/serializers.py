from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..core import MonthGrid, TimelineEntry
from ..domain import MaterialRecord, NoteRecord, Principal, SessionEvent
from .models import (
    EventPayload,
    MaterialPayload,
    MonthGridPayload,
    NotePayload,
    PrincipalPayload,
    TimelineEntryPayload,
)


def serialize_principal(principal: Principal) -> Dict[str, Any]:
    return PrincipalPayload.from_domain(principal).model_dump()


def serialize_event(event: SessionEvent) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump()


def serialize_grid(grid: MonthGrid) -> Dict[str, Any]:
    return MonthGridPayload.from_domain(grid).model_dump()


def serialize_timeline(entries: Iterable[TimelineEntry]) -> List[Dict[str, Any]]:
    return [TimelineEntryPayload.from_domain(entry).model_dump() for entry in entries]


def serialize_note(note: NoteRecord) -> Dict[str, Any]:
    return NotePayload.from_domain(note).model_dump()


def serialize_material(material: MaterialRecord) -> Dict[str, Any]:
    return MaterialPayload.from_domain(material).model_dump()
