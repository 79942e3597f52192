from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..core import filter_visible, is_visible, owner_column
from ..domain import MaterialRecord, NoteRecord, NotFound, Principal, Role, Unauthorized
from .context import ServiceContext

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _newest_first(created_at: Optional[datetime]) -> datetime:
    if created_at is None:
        return _OLDEST
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


@dataclass(slots=True)
class LibraryService:
    """Read side for notes and PDF materials."""

    context: ServiceContext

    def visible_materials(self, principal: Principal) -> List[MaterialRecord]:
        materials = self.context.materials.list_for_owner(owner_column(principal), principal.id)
        visible = filter_visible(materials, principal)
        return sorted(visible, key=lambda item: _newest_first(item.created_at), reverse=True)

    def visible_notes(self, principal: Principal) -> List[NoteRecord]:
        notes = filter_visible(
            self.context.notes.list_for_owner(owner_column(principal), principal.id),
            principal,
        )
        by_note: Dict[str, List[MaterialRecord]] = {}
        for material in self.visible_materials(principal):
            if material.note_id:
                by_note.setdefault(material.note_id, []).append(material)
        for note in notes:
            note.materials = by_note.get(note.id, [])
        return sorted(notes, key=lambda item: _newest_first(item.created_at), reverse=True)

    def material_url(self, principal: Principal, material_id: str, expires_in: Optional[int] = None) -> str:
        material = self.context.materials.fetch(material_id)
        if material is None or not is_visible(material, principal):
            raise NotFound("This file is not available.")
        ttl = expires_in or self.context.settings.storage.signed_url_ttl
        return self.context.storage.signed_url(material.storage_path, ttl)

    def list_students(self, principal: Principal) -> List[Principal]:
        if not principal.role.can_manage:
            raise Unauthorized("Only tutors can list students.")
        return self.context.profiles.list_by_role(Role.STUDENT)
