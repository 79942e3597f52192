from __future__ import annotations

from typing import Iterable, List, Protocol, TypeVar

from ..domain import Principal


class Owned(Protocol):
    tutor_id: str
    student_id: str


OwnedT = TypeVar("OwnedT", bound=Owned)


def owner_column(principal: Principal) -> str:
    """Column that scopes records for ``principal``.

    Store queries and :func:`filter_visible` share this predicate.
    """

    return "tutor_id" if principal.role.can_manage else "student_id"


def is_visible(record: Owned, principal: Principal) -> bool:
    return getattr(record, owner_column(principal)) == principal.id


def filter_visible(records: Iterable[OwnedT], principal: Principal) -> List[OwnedT]:
    """Return the records ``principal`` may see, without reordering or mutating the input."""

    return [record for record in records if is_visible(record, principal)]
