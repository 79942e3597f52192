from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..core import MonthGrid, TimelineEntry, build_month_grid, build_timeline, filter_visible, owner_column
from ..domain import Principal, SessionEvent
from .context import ServiceContext


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext

    def today(self) -> date:
        return self.context.clock().astimezone(self.context.settings.portal.tz).date()

    def visible_events(self, principal: Principal) -> List[SessionEvent]:
        """Events scoped at the store by owner, then filtered again locally."""

        events = self.context.events.list_for_owner(owner_column(principal), principal.id)
        return filter_visible(events, principal)

    def month_grid(self, principal: Principal, reference: Optional[date] = None) -> MonthGrid:
        today = self.today()
        return build_month_grid(
            self.visible_events(principal),
            reference or today,
            today=today,
            tz=self.context.settings.portal.tz,
        )

    def timeline(self, principal: Principal) -> List[TimelineEntry]:
        return build_timeline(self.visible_events(principal), now=self.context.clock())
