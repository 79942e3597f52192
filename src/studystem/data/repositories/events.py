from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...domain import SessionEvent, UpstreamUnavailable
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class EventRepository:
    gateway: SupabaseGateway
    table_name: str

    def list_for_owner(self, column: str, owner_id: str) -> List[SessionEvent]:
        """Events whose ``column`` (``tutor_id`` or ``student_id``) equals ``owner_id``."""

        response = self.gateway.run(
            "list events",
            lambda: self.gateway.table(self.table_name)
            .select("*")
            .eq(column, owner_id)
            .order("start_at", desc=False)
            .execute(),
        )
        records = response.data or []
        return [SessionEvent.from_record(record) for record in records]

    def fetch(self, event_id: str) -> Optional[SessionEvent]:
        response = self.gateway.run(
            "fetch event",
            lambda: self.gateway.table(self.table_name).select("*").eq("id", event_id).limit(1).execute(),
        )
        records = response.data or []
        if not records:
            return None
        return SessionEvent.from_record(records[0])

    def insert(self, payload: Dict[str, Any]) -> SessionEvent:
        response = self.gateway.run(
            "insert event",
            lambda: self.gateway.table(self.table_name).insert(payload).execute(),
        )
        records = response.data or []
        if not records:
            raise UpstreamUnavailable("The session could not be saved. Please try again.")
        return SessionEvent.from_record(records[0])

    def delete(self, event_id: str) -> bool:
        response = self.gateway.run(
            "delete event",
            lambda: self.gateway.table(self.table_name).delete().eq("id", event_id).execute(),
        )
        deleted = response.data or []
        return bool(deleted)
