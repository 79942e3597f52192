from __future__ import annotations

from dataclasses import dataclass, field

from ..services import AuthService, CalendarService, LibraryService, MutationGateway, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    auth: AuthService = field(init=False)
    calendar: CalendarService = field(init=False)
    library: LibraryService = field(init=False)
    mutations: MutationGateway = field(init=False)

    def __post_init__(self) -> None:
        self.bind(self.context)

    def bind(self, context: ServiceContext) -> None:
        """Point every service at ``context``."""

        self.context = context
        self.auth = AuthService(context)
        self.calendar = CalendarService(context)
        self.library = LibraryService(context)
        self.mutations = MutationGateway(context)


api_state = ApiState()
