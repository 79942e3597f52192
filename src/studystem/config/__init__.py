"""Configuration models and helpers."""

from __future__ import annotations

from .paths import DATA_DIR, LOG_FILE, ensure_data_dir
from .settings import AppSettings, PortalSettings, StorageSettings, SupabaseSettings, get_settings

__all__ = [
    "AppSettings",
    "DATA_DIR",
    "LOG_FILE",
    "PortalSettings",
    "StorageSettings",
    "SupabaseSettings",
    "ensure_data_dir",
    "get_settings",
]
