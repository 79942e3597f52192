"""Error taxonomy for portal operations.

Every error carries a message that can be shown to the user as-is. Messages
name the cause but never echo record identifiers.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base class for failures surfaced to portal callers."""

    default_message = "The request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(PortalError):
    default_message = "You are not allowed to perform this action."


class InvalidReference(PortalError):
    default_message = "The referenced record does not exist."


class InvalidInterval(PortalError):
    default_message = "A session must last at least one minute."


class InvalidInput(PortalError):
    default_message = "The submitted form is incomplete or invalid."


class NotFound(PortalError):
    default_message = "The requested record no longer exists."


class UpstreamUnavailable(PortalError):
    default_message = "The portal backend is unavailable. Please try again."
