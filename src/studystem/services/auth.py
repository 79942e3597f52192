from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..data import SupabaseSessionMissingError
from ..domain import Principal, Role
from .context import ServiceContext

logger = logging.getLogger(__name__)


def _metadata_role(metadata: Mapping[str, Any]) -> Role | None:
    return Role.parse(metadata.get("role")) or Role.parse(metadata.get("userType"))


def _display_name(user: Any, metadata: Mapping[str, Any]) -> str:
    if metadata.get("name"):
        return str(metadata["name"])
    email = getattr(user, "email", None) or ""
    return email.split("@")[0] if email else "User"


@dataclass(slots=True)
class AuthService:
    context: ServiceContext

    def _client(self):
        return self.context.gateway.ensure_client()

    def sign_in_with_password(self, email: str, password: str) -> Principal:
        response = self._client().auth.sign_in_with_password({"email": email, "password": password})
        session = getattr(response, "session", None)
        if not session:
            raise SupabaseSessionMissingError("Sign in did not return a session.")
        self.context.gateway.set_session(session)
        principal = self.resolve(session)
        logger.info("Signed in as %s", principal.role.value)
        return principal

    def set_session(self, session: Any) -> None:
        self.context.gateway.set_session(session)

    def sign_out(self) -> None:
        try:
            self._client().auth.sign_out()
        finally:
            self.context.gateway.clear_session()

    def resolve(self, session: Any) -> Principal:
        """Resolve a session into a typed principal.

        Precedence is fixed: an existing profile row is authoritative, then the
        ``role``/``userType`` keys of the auth user metadata, then ``student``.
        """

        user = getattr(session, "user", None)
        user_id = getattr(user, "id", None)
        if not user_id:
            raise SupabaseSessionMissingError("Supabase session has no user id.")

        metadata = getattr(user, "user_metadata", None) or {}
        profile = self.context.profiles.fetch(str(user_id))
        if profile is not None:
            return Principal(
                id=profile.id,
                display_name=profile.display_name or _display_name(user, metadata),
                role=profile.role,
            )
        return Principal(
            id=str(user_id),
            display_name=_display_name(user, metadata),
            role=_metadata_role(metadata) or Role.STUDENT,
        )

    def current_principal(self) -> Principal:
        return self.resolve(self.context.gateway.session())
