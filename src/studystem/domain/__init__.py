"""Domain models for tutoring sessions, notes, and materials."""

from __future__ import annotations

from .enums import Role
from .errors import (
    InvalidInput,
    InvalidInterval,
    InvalidReference,
    NotFound,
    PortalError,
    Unauthorized,
    UpstreamUnavailable,
)
from .models import MaterialRecord, NoteRecord, Principal, SessionEvent

__all__ = [
    "InvalidInput",
    "InvalidInterval",
    "InvalidReference",
    "MaterialRecord",
    "NoteRecord",
    "NotFound",
    "PortalError",
    "Principal",
    "Role",
    "SessionEvent",
    "Unauthorized",
    "UpstreamUnavailable",
]
