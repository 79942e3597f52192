from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config.settings import SupabaseSettings
from ..domain import UpstreamUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SupabaseNotInitializedError(RuntimeError):
    """Raised when accessing the Supabase client before it can be configured."""


class SupabaseSessionMissingError(RuntimeError):
    """Raised when a session-specific action is attempted without a session."""


@dataclass
class SupabaseGateway:
    """Thin wrapper around the Supabase Python client with session awareness."""

    settings: SupabaseSettings
    _client: Optional[Client] = None
    _session: Optional[Any] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise SupabaseNotInitializedError(f"Supabase settings are incomplete; missing {missing}.")
        self._client = create_client(self.settings.url, self.settings.anon_key)
        return self._client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def session(self) -> Any:
        if self._session is None:
            raise SupabaseSessionMissingError("Sign in before using the portal.")
        return self._session

    def table(self, name: str):
        return self.ensure_client().table(name)

    def bucket(self, name: str):
        return self.ensure_client().storage.from_(name)

    def run(self, action: str, call: Callable[[], T]) -> T:
        """Execute one store request, wrapping transport and API failures."""

        try:
            return call()
        except (APIError, httpx.HTTPError) as exc:
            logger.exception("Supabase request failed: %s", action)
            raise UpstreamUnavailable() from exc

    def run_storage(self, action: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Supabase storage request failed: %s", action)
            raise UpstreamUnavailable("File storage is unavailable. Please try again.") from exc
