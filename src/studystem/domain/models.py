from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .enums import Role


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


def _optional_datetime(value: Any) -> Optional[datetime]:
    return _parse_datetime(value) if value else None


@dataclass(slots=True, frozen=True)
class Principal:
    id: str
    display_name: str
    role: Role = Role.STUDENT

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Principal":
        identifier = str(record.get("user_id") or record["id"])
        return cls(
            id=identifier,
            display_name=record.get("display_name") or "",
            role=Role.parse(record.get("role")) or Role.STUDENT,
        )


@dataclass(slots=True)
class SessionEvent:
    id: str
    tutor_id: str
    student_id: str
    title: str
    starts_at: datetime
    ends_at: datetime
    notes: str = ""
    created_at: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        seconds = (self.ends_at - self.starts_at).total_seconds()
        return int(seconds / 60 + 0.5)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SessionEvent":
        return cls(
            id=str(record["id"]),
            tutor_id=str(record["tutor_id"]),
            student_id=str(record["student_id"]),
            title=str(record["title"]),
            starts_at=_parse_datetime(record["start_at"]),
            ends_at=_parse_datetime(record["end_at"]),
            notes=record.get("notes") or "",
            created_at=_optional_datetime(record.get("created_at")),
        )

    @staticmethod
    def draft(
        *,
        tutor_id: str,
        student_id: str,
        title: str,
        starts_at: datetime,
        ends_at: datetime,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Insert payload for a new event. The store assigns ``id``."""

        return {
            "tutor_id": tutor_id,
            "student_id": student_id,
            "title": title,
            "start_at": starts_at.isoformat(),
            "end_at": ends_at.isoformat(),
            "notes": notes or None,
        }


@dataclass(slots=True)
class MaterialRecord:
    id: str
    tutor_id: str
    student_id: str
    storage_path: str
    filename: str
    size_bytes: int
    mime_type: str
    note_id: Optional[str] = None
    event_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "MaterialRecord":
        return cls(
            id=str(record["id"]),
            tutor_id=str(record["tutor_id"]),
            student_id=str(record["student_id"]),
            storage_path=str(record["storage_path"]),
            filename=str(record["filename"]),
            size_bytes=int(record.get("size_bytes") or 0),
            mime_type=record.get("mime_type") or "",
            note_id=record.get("note_id"),
            event_id=record.get("event_id"),
            created_at=_optional_datetime(record.get("created_at")),
        )

    @staticmethod
    def draft(
        *,
        tutor_id: str,
        student_id: str,
        storage_path: str,
        filename: str,
        size_bytes: int,
        mime_type: str,
        note_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "tutor_id": tutor_id,
            "student_id": student_id,
            "storage_path": storage_path,
            "filename": filename,
            "size_bytes": size_bytes,
            "mime_type": mime_type,
            "note_id": note_id,
            "event_id": event_id,
        }


@dataclass(slots=True)
class NoteRecord:
    id: str
    tutor_id: str
    student_id: str
    title: str
    content: str = ""
    subject: str = ""
    event_id: Optional[str] = None
    created_at: Optional[datetime] = None
    materials: List[MaterialRecord] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "NoteRecord":
        return cls(
            id=str(record["id"]),
            tutor_id=str(record["tutor_id"]),
            student_id=str(record["student_id"]),
            title=str(record["title"]),
            content=record.get("content") or "",
            subject=record.get("subject") or "",
            event_id=record.get("event_id"),
            created_at=_optional_datetime(record.get("created_at")),
        )

    @staticmethod
    def draft(
        *,
        tutor_id: str,
        student_id: str,
        title: str,
        content: str = "",
        subject: str = "",
        event_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "tutor_id": tutor_id,
            "student_id": student_id,
            "title": title,
            "content": content,
            "subject": subject or None,
            "event_id": event_id,
        }


__all__ = ["MaterialRecord", "NoteRecord", "Principal", "SessionEvent"]
