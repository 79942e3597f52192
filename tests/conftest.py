import pytest

from fakes import FakeContext
from studystem.domain import Principal, Role


@pytest.fixture
def tutor() -> Principal:
    return Principal(id="tutor-a", display_name="Ada Tutor", role=Role.TUTOR)


@pytest.fixture
def other_tutor() -> Principal:
    return Principal(id="tutor-b", display_name="Ben Tutor", role=Role.TUTOR)


@pytest.fixture
def admin() -> Principal:
    return Principal(id="admin-1", display_name="Head Office", role=Role.ADMIN)


@pytest.fixture
def student() -> Principal:
    return Principal(id="student-a", display_name="Sam Student", role=Role.STUDENT)


@pytest.fixture
def other_student() -> Principal:
    return Principal(id="student-b", display_name="Tia Student", role=Role.STUDENT)


@pytest.fixture
def context(tutor, other_tutor, admin, student, other_student) -> FakeContext:
    ctx = FakeContext()
    for principal in (tutor, other_tutor, admin, student, other_student):
        ctx.profiles.add(principal)
    return ctx
