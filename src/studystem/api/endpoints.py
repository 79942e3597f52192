from __future__ import annotations

import base64
import binascii
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..core import shift_month
from ..domain import InvalidInput, Principal
from ..services.mutations import PDF_MIME_TYPE
from .registry import register_api
from .serializers import (
    serialize_event,
    serialize_grid,
    serialize_material,
    serialize_note,
    serialize_principal,
    serialize_timeline,
)
from .state import api_state


def _principal() -> Principal:
    return api_state.auth.current_principal()


def _parse_datetime(timestamp: str) -> datetime:
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidInput("Start time must be an ISO timestamp such as 2024-03-10T14:00.") from exc


def _parse_month(value: str) -> date:
    try:
        return date.fromisoformat(f"{value}-01") if len(value) == 7 else date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInput("Month must be formatted YYYY-MM.") from exc


@register_api(
    "sign_in",
    description="Sign in with email and password and return the resolved principal.",
    category="accounts",
    tags=("auth",),
)
def sign_in(email: str, password: str) -> Dict[str, Any]:
    principal = api_state.auth.sign_in_with_password(email, password)
    return {"principal": serialize_principal(principal)}


@register_api(
    "sign_out",
    description="End the current session.",
    category="accounts",
    tags=("auth",),
)
def sign_out() -> Dict[str, Any]:
    api_state.auth.sign_out()
    return {"signed_out": True}


@register_api(
    "current_principal",
    description="Return the id, display name, and role of the signed-in user.",
    category="accounts",
    tags=("read",),
)
def current_principal() -> Dict[str, Any]:
    return {"principal": serialize_principal(_principal())}


@register_api(
    "calendar_month",
    description="Return the six-week month grid of visible sessions. Month is YYYY-MM; offset moves by whole months.",
    category="calendar",
    tags=("read", "grid"),
)
def calendar_month(month: Optional[str] = None, offset: int = 0) -> Dict[str, Any]:
    principal = _principal()
    reference = _parse_month(month) if month else api_state.calendar.today()
    grid = api_state.calendar.month_grid(principal, shift_month(reference, offset))
    return {"grid": serialize_grid(grid)}


@register_api(
    "calendar_list",
    description="Return visible sessions in chronological order, each flagged as past or upcoming.",
    category="calendar",
    tags=("read", "list"),
)
def calendar_list() -> Dict[str, Any]:
    entries = api_state.calendar.timeline(_principal())
    return {"sessions": serialize_timeline(entries)}


@register_api(
    "create_session",
    description="Schedule a tutoring session for a student.",
    category="calendar",
    tags=("write",),
    writes=True,
)
def create_session(
    title: str,
    start: str,
    duration_minutes: int,
    student_id: str,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    event = api_state.mutations.create_event(
        _principal(),
        title,
        _parse_datetime(start),
        duration_minutes,
        student_id,
        notes,
    )
    return {"event": serialize_event(event)}


@register_api(
    "delete_session",
    description="Delete a tutoring session by id.",
    category="calendar",
    tags=("write",),
    writes=True,
)
def delete_session(event_id: str) -> Dict[str, Any]:
    api_state.mutations.delete_event(_principal(), event_id)
    return {"deleted": event_id}


@register_api(
    "list_students",
    description="List student accounts available for scheduling.",
    category="accounts",
    tags=("read",),
)
def list_students() -> Dict[str, Any]:
    students = api_state.library.list_students(_principal())
    return {"students": [serialize_principal(student) for student in students]}


@register_api(
    "list_notes",
    description="List visible notes with their attached materials, newest first.",
    category="library",
    tags=("read",),
)
def list_notes() -> Dict[str, Any]:
    notes = api_state.library.visible_notes(_principal())
    return {"notes": [serialize_note(note) for note in notes]}


@register_api(
    "create_note",
    description="Upload a note for a student, optionally linked to a session.",
    category="library",
    tags=("write",),
    writes=True,
)
def create_note(
    title: str,
    content: str,
    student_id: str,
    subject: str = "",
    event_id: Optional[str] = None,
) -> Dict[str, Any]:
    note = api_state.mutations.create_note(
        _principal(),
        title,
        content,
        student_id,
        subject=subject,
        event_id=event_id,
    )
    return {"note": serialize_note(note)}


@register_api(
    "delete_note",
    description="Delete a note and every material attached to it.",
    category="library",
    tags=("write",),
    writes=True,
)
def delete_note(note_id: str) -> Dict[str, Any]:
    api_state.mutations.delete_note(_principal(), note_id)
    return {"deleted": note_id}


@register_api(
    "list_materials",
    description="List visible PDF materials, newest first.",
    category="library",
    tags=("read",),
)
def list_materials() -> Dict[str, Any]:
    materials = api_state.library.visible_materials(_principal())
    return {"materials": [serialize_material(material) for material in materials]}


@register_api(
    "upload_material",
    description="Upload a base64-encoded PDF for a student, optionally linked to a note or session.",
    category="library",
    tags=("write",),
    writes=True,
)
def upload_material(
    filename: str,
    content_base64: str,
    student_id: str,
    mime_type: str = PDF_MIME_TYPE,
    note_id: Optional[str] = None,
    event_id: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        content = base64.b64decode(content_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInput("The uploaded file is not valid base64.") from exc
    material = api_state.mutations.upload_material(
        _principal(),
        filename,
        content,
        mime_type,
        student_id,
        note_id=note_id,
        event_id=event_id,
    )
    return {"material": serialize_material(material)}


@register_api(
    "delete_material",
    description="Delete a PDF material and its stored file.",
    category="library",
    tags=("write",),
    writes=True,
)
def delete_material(material_id: str) -> Dict[str, Any]:
    api_state.mutations.delete_material(_principal(), material_id)
    return {"deleted": material_id}


@register_api(
    "material_url",
    description="Return a time-limited link for viewing a visible PDF material.",
    category="library",
    tags=("read",),
)
def material_url(material_id: str, expires_in: Optional[int] = None) -> Dict[str, Any]:
    url = api_state.library.material_url(_principal(), material_id, expires_in)
    return {"material_id": material_id, "url": url}
