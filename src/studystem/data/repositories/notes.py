from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...domain import NoteRecord, UpstreamUnavailable
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class NoteRepository:
    gateway: SupabaseGateway
    table_name: str

    def list_for_owner(self, column: str, owner_id: str) -> List[NoteRecord]:
        response = self.gateway.run(
            "list notes",
            lambda: self.gateway.table(self.table_name)
            .select("*")
            .eq(column, owner_id)
            .order("created_at", desc=True)
            .execute(),
        )
        return [NoteRecord.from_record(record) for record in response.data or []]

    def fetch(self, note_id: str) -> Optional[NoteRecord]:
        response = self.gateway.run(
            "fetch note",
            lambda: self.gateway.table(self.table_name).select("*").eq("id", note_id).limit(1).execute(),
        )
        records = response.data or []
        return NoteRecord.from_record(records[0]) if records else None

    def insert(self, payload: Dict[str, Any]) -> NoteRecord:
        response = self.gateway.run(
            "insert note",
            lambda: self.gateway.table(self.table_name).insert(payload).execute(),
        )
        records = response.data or []
        if not records:
            raise UpstreamUnavailable("The note could not be saved. Please try again.")
        return NoteRecord.from_record(records[0])

    def delete(self, note_id: str) -> bool:
        response = self.gateway.run(
            "delete note",
            lambda: self.gateway.table(self.table_name).delete().eq("id", note_id).execute(),
        )
        return bool(response.data)
