from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from ..config import AppSettings, get_settings
from ..data import SupabaseGateway
from ..data.repositories import (
    EventRepository,
    MaterialRepository,
    MaterialStorage,
    NoteRepository,
    ProfileRepository,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, gateway, and repositories."""

    settings: AppSettings = field(default_factory=get_settings)
    clock: Callable[[], datetime] = utc_now
    gateway: SupabaseGateway = field(init=False)
    events: EventRepository = field(init=False)
    notes: NoteRepository = field(init=False)
    materials: MaterialRepository = field(init=False)
    storage: MaterialStorage = field(init=False)
    profiles: ProfileRepository = field(init=False)

    def __post_init__(self) -> None:
        tables = self.settings.storage
        self.gateway = SupabaseGateway(self.settings.supabase)
        self.events = EventRepository(gateway=self.gateway, table_name=tables.events_table)
        self.notes = NoteRepository(gateway=self.gateway, table_name=tables.notes_table)
        self.materials = MaterialRepository(gateway=self.gateway, table_name=tables.materials_table)
        self.storage = MaterialStorage(gateway=self.gateway, bucket_name=tables.materials_bucket)
        self.profiles = ProfileRepository(gateway=self.gateway, table_name=tables.profiles_table)
