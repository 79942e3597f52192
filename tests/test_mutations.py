"""
Unit tests for the mutation gateway.
"""

from datetime import datetime, timedelta, timezone

import pytest

from fakes import FakeContext, make_settings
from studystem.domain import (
    InvalidInput,
    InvalidInterval,
    InvalidReference,
    NotFound,
    Unauthorized,
    UpstreamUnavailable,
)
from studystem.services import CalendarService, MutationGateway

START = datetime(2024, 3, 10, 14, 0, tzinfo=timezone.utc)
PDF = b"%PDF-1.7 fake"


@pytest.fixture
def gateway(context) -> MutationGateway:
    return MutationGateway(context)


class TestCreateEvent:
    """Test cases for scheduling sessions."""

    def test_round_trip_visible_to_creating_tutor(self, context, gateway, tutor, student):
        """A created session is returned with an id and shows up for its tutor."""
        event = gateway.create_event(tutor, "Algebra", START, 90, student.id, "Bring homework")

        visible = CalendarService(context).visible_events(tutor)

        assert event.id
        assert event.ends_at == datetime(2024, 3, 10, 15, 30, tzinfo=timezone.utc)
        assert event.duration_minutes == 90
        assert event.tutor_id == tutor.id
        assert event.notes == "Bring homework"
        assert [item.id for item in visible] == [event.id]

    def test_ids_are_unique(self, gateway, tutor, student):
        """Identical sessions still get distinct ids."""
        first = gateway.create_event(tutor, "Algebra", START, 60, student.id)
        second = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        assert first.id != second.id

    def test_student_cannot_create(self, context, gateway, student):
        """Students are rejected and nothing is persisted."""
        with pytest.raises(Unauthorized):
            gateway.create_event(student, "Algebra", START, 60, student.id)

        assert context.events.rows == {}

    def test_authorization_checked_before_validation(self, gateway, student):
        """A student with invalid input still gets Unauthorized."""
        with pytest.raises(Unauthorized):
            gateway.create_event(student, "", START, 0, "nobody")

    @pytest.mark.parametrize("minutes", [0, -15])
    def test_non_positive_duration(self, context, gateway, tutor, student, minutes):
        """Sessions must have a positive duration."""
        with pytest.raises(InvalidInterval):
            gateway.create_event(tutor, "Algebra", START, minutes, student.id)

        assert context.events.rows == {}

    def test_unknown_student(self, gateway, tutor):
        """The student must exist."""
        with pytest.raises(InvalidReference):
            gateway.create_event(tutor, "Algebra", START, 60, "ghost")

    def test_student_reference_must_be_a_student(self, gateway, tutor, other_tutor):
        """Referencing a tutor as the student is rejected."""
        with pytest.raises(InvalidReference):
            gateway.create_event(tutor, "Algebra", START, 60, other_tutor.id)

    def test_blank_title(self, gateway, tutor, student):
        """Titles must not be blank."""
        with pytest.raises(InvalidInput):
            gateway.create_event(tutor, "   ", START, 60, student.id)

    def test_admin_can_create(self, gateway, admin, student):
        """Admins manage sessions like tutors."""
        event = gateway.create_event(admin, "Review", START, 30, student.id)

        assert event.tutor_id == admin.id

    def test_naive_start_uses_portal_timezone(self, student, tutor):
        """Naive start times are read in the configured timezone."""
        context = FakeContext(settings=make_settings("UTC"))
        context.profiles.add(student)
        event = MutationGateway(context).create_event(tutor, "Algebra", datetime(2024, 3, 10, 14, 0), 45, student.id)

        assert event.starts_at == START
        assert event.ends_at - event.starts_at == timedelta(minutes=45)

    def test_session_across_dst_change_keeps_its_length(self, student, tutor):
        """A session spanning the spring-forward gap still lasts its full duration."""
        context = FakeContext(settings=make_settings("America/New_York"))
        context.profiles.add(student)
        event = MutationGateway(context).create_event(tutor, "Algebra", datetime(2024, 3, 10, 1, 30), 90, student.id)

        assert event.starts_at == datetime(2024, 3, 10, 6, 30, tzinfo=timezone.utc)
        assert event.ends_at == datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)
        assert event.ends_at - event.starts_at == timedelta(minutes=90)
        assert event.duration_minutes == 90

    @pytest.mark.parametrize("minutes", [float("nan"), float("inf"), 45.5, True, "60", None])
    def test_malformed_duration(self, context, gateway, tutor, student, minutes):
        """Durations must be whole minutes."""
        with pytest.raises(InvalidInterval):
            gateway.create_event(tutor, "Algebra", START, minutes, student.id)

        assert context.events.rows == {}

    @pytest.mark.parametrize("minutes", [10**12, 10**20])
    def test_duration_past_calendar_range(self, context, gateway, tutor, student, minutes):
        """Lengths that run off the calendar are rejected before any write."""
        with pytest.raises(InvalidInterval):
            gateway.create_event(tutor, "Algebra", START, minutes, student.id)

        assert context.events.rows == {}

    def test_integral_float_duration_accepted(self, gateway, tutor, student):
        event = gateway.create_event(tutor, "Algebra", START, 60.0, student.id)

        assert event.duration_minutes == 60

    def test_upstream_failure_surfaces(self, context, gateway, tutor, student):
        """Store failures are not retried."""
        context.events.fail_insert = True

        with pytest.raises(UpstreamUnavailable):
            gateway.create_event(tutor, "Algebra", START, 60, student.id)


class TestDeleteEvent:
    """Test cases for deleting sessions."""

    def test_second_delete_is_not_found(self, context, gateway, tutor, student):
        """Deleting the same id twice reports NotFound the second time."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        gateway.delete_event(tutor, event.id)
        with pytest.raises(NotFound):
            gateway.delete_event(tutor, event.id)

        assert context.events.rows == {}

    def test_other_tutor_cannot_delete(self, context, gateway, tutor, other_tutor, student):
        """Deletion is scoped to the owning tutor."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        with pytest.raises(Unauthorized) as excinfo:
            gateway.delete_event(other_tutor, event.id)

        assert event.id in context.events.rows
        assert event.id not in excinfo.value.message
        assert "owning tutor" in excinfo.value.message

    def test_student_cannot_delete(self, context, gateway, tutor, student):
        """Students cannot delete even their own sessions."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        with pytest.raises(Unauthorized):
            gateway.delete_event(student, event.id)

        assert event.id in context.events.rows

    def test_student_gets_unauthorized_for_unknown_id(self, gateway, student):
        """Existence is not revealed to students."""
        with pytest.raises(Unauthorized):
            gateway.delete_event(student, "missing")

    def test_admin_can_delete_any(self, context, gateway, tutor, admin, student):
        """Admins may delete sessions owned by any tutor."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        gateway.delete_event(admin, event.id)

        assert context.events.rows == {}


class TestNotesAndMaterials:
    """Test cases for notes, materials, and the cascade policy."""

    def test_create_note_linked_to_event(self, gateway, tutor, student):
        """Notes may reference one of the tutor's sessions."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        note = gateway.create_note(tutor, "Week 1", "Factoring", student.id, subject="Math", event_id=event.id)

        assert note.id
        assert note.event_id == event.id
        assert note.subject == "Math"

    def test_note_cannot_reference_other_tutors_event(self, gateway, tutor, other_tutor, student):
        """Linking to a session owned by someone else is rejected."""
        event = gateway.create_event(tutor, "Algebra", START, 60, student.id)

        with pytest.raises(InvalidReference):
            gateway.create_note(other_tutor, "Week 1", "", student.id, event_id=event.id)

    def test_student_cannot_create_note(self, gateway, student):
        with pytest.raises(Unauthorized):
            gateway.create_note(student, "Week 1", "", student.id)

    def test_only_pdf_uploads(self, context, gateway, tutor, student):
        """Non-PDF uploads are rejected before touching storage."""
        with pytest.raises(InvalidInput):
            gateway.upload_material(tutor, "notes.docx", b"data", "application/msword", student.id)

        assert context.storage.objects == {}

    def test_upload_material(self, context, gateway, tutor, student):
        """Uploads store the object under the student's folder and record metadata."""
        material = gateway.upload_material(tutor, "week1.pdf", PDF, "application/pdf", student.id)

        assert material.storage_path.startswith(f"{student.id}/")
        assert material.storage_path.endswith(".pdf")
        assert material.size_bytes == len(PDF)
        assert context.storage.objects[material.storage_path] == PDF

    def test_failed_metadata_insert_removes_object(self, context, gateway, tutor, student):
        """A failed insert leaves no orphaned object behind."""
        context.materials.fail_insert = True

        with pytest.raises(UpstreamUnavailable):
            gateway.upload_material(tutor, "week1.pdf", PDF, "application/pdf", student.id)

        assert context.storage.objects == {}

    def test_material_note_must_match_student(self, gateway, tutor, student, other_student):
        """A material cannot attach to another student's note."""
        note = gateway.create_note(tutor, "Week 1", "", student.id)

        with pytest.raises(InvalidReference):
            gateway.upload_material(tutor, "week1.pdf", PDF, "application/pdf", other_student.id, note_id=note.id)

    def test_delete_note_cascades_to_materials(self, context, gateway, tutor, student):
        """Deleting a note removes attached material rows and stored files."""
        note = gateway.create_note(tutor, "Week 1", "", student.id)
        attached = gateway.upload_material(tutor, "a.pdf", PDF, "application/pdf", student.id, note_id=note.id)
        loose = gateway.upload_material(tutor, "b.pdf", PDF, "application/pdf", student.id)

        gateway.delete_note(tutor, note.id)

        assert note.id not in context.notes.rows
        assert attached.id not in context.materials.rows
        assert attached.storage_path not in context.storage.objects
        assert loose.id in context.materials.rows
        assert loose.storage_path in context.storage.objects

    def test_other_tutor_cannot_delete_note(self, context, gateway, tutor, other_tutor, student):
        note = gateway.create_note(tutor, "Week 1", "", student.id)

        with pytest.raises(Unauthorized):
            gateway.delete_note(other_tutor, note.id)

        assert note.id in context.notes.rows

    def test_delete_material_twice(self, context, gateway, tutor, student):
        material = gateway.upload_material(tutor, "a.pdf", PDF, "application/pdf", student.id)

        gateway.delete_material(tutor, material.id)
        with pytest.raises(NotFound):
            gateway.delete_material(tutor, material.id)

        assert context.storage.objects == {}
