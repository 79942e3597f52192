"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .auth import AuthService
from .calendar import CalendarService
from .context import ServiceContext
from .library import LibraryService
from .mutations import MutationGateway

__all__ = ["AuthService", "CalendarService", "LibraryService", "MutationGateway", "ServiceContext"]
