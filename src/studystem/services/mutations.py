"""The single write path into the store.

Every create and delete checks the caller's role first, validates its input
next, and only then issues one store request. Nothing here refreshes views;
callers re-read through :class:`CalendarService` or :class:`LibraryService`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from ..domain import (
    InvalidInput,
    InvalidInterval,
    InvalidReference,
    MaterialRecord,
    NoteRecord,
    NotFound,
    Principal,
    Role,
    SessionEvent,
    Unauthorized,
)
from .context import ServiceContext

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def _require_manager(principal: Principal, message: str) -> None:
    if not principal.role.can_manage:
        logger.warning("Rejected %s request: %s", principal.role.value, message)
        raise Unauthorized(message)


def _require_owner(principal: Principal, tutor_id: str, message: str) -> None:
    if principal.role is Role.TUTOR and tutor_id != principal.id:
        logger.warning("Rejected delete by non-owning tutor")
        raise Unauthorized(message)


@dataclass(slots=True)
class MutationGateway:
    context: ServiceContext

    def _localize(self, start: datetime) -> datetime:
        if start.tzinfo is None:
            start = start.replace(tzinfo=self.context.settings.portal.tz)
        return start.astimezone(timezone.utc)

    def _interval(self, start: datetime, duration_minutes: object) -> tuple[datetime, datetime]:
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, (int, float)):
            raise InvalidInterval("A session length must be a whole number of minutes.")
        if isinstance(duration_minutes, float) and not duration_minutes.is_integer():
            raise InvalidInterval("A session length must be a whole number of minutes.")
        if duration_minutes <= 0:
            raise InvalidInterval("A session must last at least one minute.")
        # Elapsed minutes in UTC, not wall-clock minutes.
        try:
            starts_at = self._localize(start)
            ends_at = starts_at + timedelta(minutes=int(duration_minutes))
        except OverflowError as exc:
            raise InvalidInterval("That session length is too long.") from exc
        return starts_at, ends_at

    def _require_student(self, student_id: str) -> Principal:
        student = self.context.profiles.fetch(student_id) if student_id else None
        if student is None or student.role is not Role.STUDENT:
            raise InvalidReference("The selected student does not exist.")
        return student

    def _owned_event(self, principal: Principal, event_id: str) -> SessionEvent:
        event = self.context.events.fetch(event_id)
        if event is None or (principal.role is Role.TUTOR and event.tutor_id != principal.id):
            raise InvalidReference("The linked session does not exist.")
        return event

    def _owned_note(self, principal: Principal, note_id: str) -> NoteRecord:
        note = self.context.notes.fetch(note_id)
        if note is None or (principal.role is Role.TUTOR and note.tutor_id != principal.id):
            raise InvalidReference("The linked note does not exist.")
        return note

    def create_event(
        self,
        principal: Principal,
        title: str,
        start: datetime,
        duration_minutes: int,
        student_id: str,
        notes: Optional[str] = None,
    ) -> SessionEvent:
        _require_manager(principal, "Only tutors can schedule sessions.")
        starts_at, ends_at = self._interval(start, duration_minutes)
        if not title or not title.strip():
            raise InvalidInput("A session needs a title.")
        self._require_student(student_id)

        event = self.context.events.insert(
            SessionEvent.draft(
                tutor_id=principal.id,
                student_id=student_id,
                title=title.strip(),
                starts_at=starts_at,
                ends_at=ends_at,
                notes=notes,
            )
        )
        logger.info("Scheduled session %s (%d min)", event.id, duration_minutes)
        return event

    def delete_event(self, principal: Principal, event_id: str) -> None:
        _require_manager(principal, "Students cannot delete sessions.")
        event = self.context.events.fetch(event_id)
        if event is None:
            raise NotFound("This session no longer exists.")
        _require_owner(principal, event.tutor_id, "Only the owning tutor may delete this session.")
        if not self.context.events.delete(event.id):
            raise NotFound("This session no longer exists.")
        logger.info("Deleted session %s", event.id)

    def create_note(
        self,
        principal: Principal,
        title: str,
        content: str,
        student_id: str,
        subject: str = "",
        event_id: Optional[str] = None,
    ) -> NoteRecord:
        _require_manager(principal, "Only tutors can upload notes.")
        if not title or not title.strip():
            raise InvalidInput("A note needs a title.")
        self._require_student(student_id)
        if event_id:
            self._owned_event(principal, event_id)

        note = self.context.notes.insert(
            NoteRecord.draft(
                tutor_id=principal.id,
                student_id=student_id,
                title=title.strip(),
                content=content or "",
                subject=subject,
                event_id=event_id,
            )
        )
        logger.info("Created note %s", note.id)
        return note

    def delete_note(self, principal: Principal, note_id: str) -> None:
        """Delete a note together with every material attached to it."""

        _require_manager(principal, "Students cannot delete notes.")
        note = self.context.notes.fetch(note_id)
        if note is None:
            raise NotFound("This note no longer exists.")
        _require_owner(principal, note.tutor_id, "You can only delete notes that you uploaded.")

        attached = self.context.materials.list_for_note(note.id)
        for material in attached:
            self.context.materials.delete(material.id)
        self.context.storage.remove([material.storage_path for material in attached])
        if not self.context.notes.delete(note.id):
            raise NotFound("This note no longer exists.")
        logger.info("Deleted note %s with %d material(s)", note.id, len(attached))

    def upload_material(
        self,
        principal: Principal,
        filename: str,
        content: bytes,
        mime_type: str,
        student_id: str,
        note_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> MaterialRecord:
        _require_manager(principal, "Only tutors can upload materials.")
        if mime_type != PDF_MIME_TYPE:
            raise InvalidInput("Only PDF files are allowed.")
        if not filename or not content:
            raise InvalidInput("The uploaded file is empty.")
        self._require_student(student_id)
        if note_id:
            note = self._owned_note(principal, note_id)
            if note.student_id != student_id:
                raise InvalidReference("The linked note belongs to another student.")
        if event_id:
            self._owned_event(principal, event_id)

        stamp = int(self.context.clock().timestamp() * 1000)
        storage_path = f"{student_id}/{stamp}_{uuid4().hex[:8]}.pdf"
        self.context.storage.upload(storage_path, content, PDF_MIME_TYPE)
        try:
            material = self.context.materials.insert(
                MaterialRecord.draft(
                    tutor_id=principal.id,
                    student_id=student_id,
                    storage_path=storage_path,
                    filename=filename,
                    size_bytes=len(content),
                    mime_type=mime_type,
                    note_id=note_id,
                    event_id=event_id,
                )
            )
        except Exception:
            self.context.storage.remove([storage_path])
            raise
        logger.info("Uploaded material %s (%d bytes)", material.id, material.size_bytes)
        return material

    def delete_material(self, principal: Principal, material_id: str) -> None:
        _require_manager(principal, "Students cannot delete materials.")
        material = self.context.materials.fetch(material_id)
        if material is None:
            raise NotFound("This file no longer exists.")
        _require_owner(principal, material.tutor_id, "You can only delete files that you uploaded.")
        if not self.context.materials.delete(material.id):
            raise NotFound("This file no longer exists.")
        self.context.storage.remove([material.storage_path])
        logger.info("Deleted material %s", material.id)
