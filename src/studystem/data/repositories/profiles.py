from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...domain import Principal, Role
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class ProfileRepository:
    gateway: SupabaseGateway
    table_name: str

    def fetch(self, user_id: str) -> Optional[Principal]:
        response = self.gateway.run(
            "fetch profile",
            lambda: self.gateway.table(self.table_name)
            .select("user_id, display_name, role")
            .eq("user_id", user_id)
            .limit(1)
            .execute(),
        )
        records = response.data or []
        if not records:
            return None
        return Principal.from_record(records[0])

    def list_by_role(self, role: Role) -> List[Principal]:
        response = self.gateway.run(
            "list profiles",
            lambda: self.gateway.table(self.table_name)
            .select("user_id, display_name, role")
            .in_("role", list(role.stored_values))
            .order("display_name")
            .execute(),
        )
        return [Principal.from_record(record) for record in response.data or []]
