"""Supabase repositories for first-class domain objects."""

from __future__ import annotations

from .events import EventRepository
from .materials import MaterialRepository, MaterialStorage
from .notes import NoteRepository
from .profiles import ProfileRepository

__all__ = ["EventRepository", "MaterialRepository", "MaterialStorage", "NoteRepository", "ProfileRepository"]
