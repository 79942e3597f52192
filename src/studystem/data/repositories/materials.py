from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...domain import MaterialRecord, UpstreamUnavailable
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class MaterialRepository:
    gateway: SupabaseGateway
    table_name: str

    def list_for_owner(self, column: str, owner_id: str) -> List[MaterialRecord]:
        response = self.gateway.run(
            "list materials",
            lambda: self.gateway.table(self.table_name)
            .select("*")
            .eq(column, owner_id)
            .order("created_at", desc=True)
            .execute(),
        )
        return [MaterialRecord.from_record(record) for record in response.data or []]

    def list_for_note(self, note_id: str) -> List[MaterialRecord]:
        response = self.gateway.run(
            "list note materials",
            lambda: self.gateway.table(self.table_name).select("*").eq("note_id", note_id).execute(),
        )
        return [MaterialRecord.from_record(record) for record in response.data or []]

    def fetch(self, material_id: str) -> Optional[MaterialRecord]:
        response = self.gateway.run(
            "fetch material",
            lambda: self.gateway.table(self.table_name).select("*").eq("id", material_id).limit(1).execute(),
        )
        records = response.data or []
        return MaterialRecord.from_record(records[0]) if records else None

    def insert(self, payload: Dict[str, Any]) -> MaterialRecord:
        response = self.gateway.run(
            "insert material",
            lambda: self.gateway.table(self.table_name).insert(payload).execute(),
        )
        records = response.data or []
        if not records:
            raise UpstreamUnavailable("The material could not be saved. Please try again.")
        return MaterialRecord.from_record(records[0])

    def delete(self, material_id: str) -> bool:
        response = self.gateway.run(
            "delete material",
            lambda: self.gateway.table(self.table_name).delete().eq("id", material_id).execute(),
        )
        return bool(response.data)


@dataclass(slots=True)
class MaterialStorage:
    """Objects in the materials bucket, addressed by their storage path."""

    gateway: SupabaseGateway
    bucket_name: str

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.gateway.run_storage(
            "upload material",
            lambda: self.gateway.bucket(self.bucket_name).upload(
                path,
                content,
                file_options={"content-type": content_type, "upsert": "false"},
            ),
        )

    def remove(self, paths: List[str]) -> None:
        if not paths:
            return
        self.gateway.run_storage(
            "remove materials",
            lambda: self.gateway.bucket(self.bucket_name).remove(paths),
        )

    def signed_url(self, path: str, expires_in: int) -> str:
        payload = self.gateway.run_storage(
            "sign material url",
            lambda: self.gateway.bucket(self.bucket_name).create_signed_url(path, expires_in),
        )
        url = payload.get("signedURL") or payload.get("signedUrl")
        if not url:
            raise UpstreamUnavailable("File storage returned no link. Please try again.")
        return str(url)
