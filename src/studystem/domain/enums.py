from __future__ import annotations

from enum import Enum
from typing import Any


class Role(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"

    @property
    def can_manage(self) -> bool:
        """Tutors and admins may create and delete records."""

        return self in (Role.TUTOR, Role.ADMIN)

    @property
    def stored_values(self) -> tuple[str, ...]:
        """Every profile value that parses to this role."""

        if self is Role.STUDENT:
            return (self.value, "user")
        return (self.value,)

    @classmethod
    def parse(cls, value: Any) -> "Role | None":
        """Map a stored role string onto a ``Role``; ``None`` when unknown.

        Legacy accounts carry ``"user"`` which means student.
        """

        if isinstance(value, Role):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        normalized = value.strip().lower()
        if normalized == "user":
            return cls.STUDENT
        try:
            return cls(normalized)
        except ValueError:
            return None
