from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    events_table: str
    notes_table: str
    materials_table: str
    profiles_table: str
    materials_bucket: str
    signed_url_ttl: int


@dataclass(frozen=True)
class PortalSettings:
    timezone: str
    log_level: str

    @property
    def tz(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    portal: PortalSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        events_table=os.getenv("STUDYSTEM_EVENTS_TABLE", "events"),
        notes_table=os.getenv("STUDYSTEM_NOTES_TABLE", "notes"),
        materials_table=os.getenv("STUDYSTEM_MATERIALS_TABLE", "materials"),
        profiles_table=os.getenv("STUDYSTEM_PROFILES_TABLE", "profiles"),
        materials_bucket=os.getenv("STUDYSTEM_MATERIALS_BUCKET", "materials"),
        signed_url_ttl=_int_from_env("STUDYSTEM_SIGNED_URL_TTL", 3600),
    )

    portal = PortalSettings(
        timezone=os.getenv("STUDYSTEM_TIMEZONE", "UTC"),
        log_level=os.getenv("STUDYSTEM_LOG_LEVEL", "INFO").upper(),
    )

    return AppSettings(supabase=supabase, storage=storage, portal=portal)
