from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core import DayCell, GridEvent, MonthGrid, TimelineEntry
from ..domain import MaterialRecord, NoteRecord, Principal, SessionEvent


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class PrincipalPayload(BaseModel):
    id: str
    display_name: str
    role: str

    @classmethod
    def from_domain(cls, principal: Principal) -> "PrincipalPayload":
        return cls(id=principal.id, display_name=principal.display_name, role=principal.role.value)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    tutor_id: str
    student_id: str
    title: str
    starts_at: str
    ends_at: str
    duration_minutes: int
    notes: str = Field(default="")
    created_at: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: SessionEvent) -> "EventPayload":
        return cls(
            id=event.id,
            tutor_id=event.tutor_id,
            student_id=event.student_id,
            title=event.title,
            starts_at=event.starts_at.isoformat(),
            ends_at=event.ends_at.isoformat(),
            duration_minutes=event.duration_minutes,
            notes=event.notes,
            created_at=_iso(event.created_at),
        )


class GridEventPayload(BaseModel):
    label: str
    event: EventPayload

    @classmethod
    def from_domain(cls, item: GridEvent) -> "GridEventPayload":
        return cls(label=item.label, event=EventPayload.from_domain(item.event))


class DayCellPayload(BaseModel):
    date: str
    day: int
    in_month: bool
    is_today: bool
    events: List[GridEventPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cell: DayCell) -> "DayCellPayload":
        return cls(
            date=cell.key,
            day=cell.number,
            in_month=cell.in_month,
            is_today=cell.is_today,
            events=[GridEventPayload.from_domain(item) for item in cell.events],
        )


class MonthGridPayload(BaseModel):
    year: int
    month: int
    title: str
    headers: List[str]
    weeks: List[List[DayCellPayload]]

    @classmethod
    def from_domain(cls, grid: MonthGrid) -> "MonthGridPayload":
        return cls(
            year=grid.year,
            month=grid.month,
            title=grid.title,
            headers=list(grid.headers),
            weeks=[[DayCellPayload.from_domain(cell) for cell in week] for week in grid.weeks],
        )


class TimelineEntryPayload(BaseModel):
    is_past: bool
    event: EventPayload

    @classmethod
    def from_domain(cls, entry: TimelineEntry) -> "TimelineEntryPayload":
        return cls(is_past=entry.is_past, event=EventPayload.from_domain(entry.event))


class MaterialPayload(BaseModel):
    id: str
    tutor_id: str
    student_id: str
    filename: str
    size_bytes: int
    mime_type: str
    note_id: Optional[str] = Field(default=None)
    event_id: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, material: MaterialRecord) -> "MaterialPayload":
        return cls(
            id=material.id,
            tutor_id=material.tutor_id,
            student_id=material.student_id,
            filename=material.filename,
            size_bytes=material.size_bytes,
            mime_type=material.mime_type,
            note_id=material.note_id,
            event_id=material.event_id,
            created_at=_iso(material.created_at),
        )


class NotePayload(BaseModel):
    id: str
    tutor_id: str
    student_id: str
    title: str
    content: str
    subject: str
    event_id: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None)
    materials: List[MaterialPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, note: NoteRecord) -> "NotePayload":
        return cls(
            id=note.id,
            tutor_id=note.tutor_id,
            student_id=note.student_id,
            title=note.title,
            content=note.content,
            subject=note.subject,
            event_id=note.event_id,
            created_at=_iso(note.created_at),
            materials=[MaterialPayload.from_domain(item) for item in note.materials],
        )
