"""Unit tests for EventService.

These test error handling and domain error mapping.
Run with: pytest tests/test_event_service.py -v
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
from django.utils import timezone

from enrollment.domain import Capacity, RegistrantRef
from enrollment.domain.errors import (
    EventNotFoundError,
    InvalidEventError,
    InvalidIdError,
    WaiverNotFoundError,
)
from tests.fakes import make_template, optional, required


def event_fields(**overrides):
    now = timezone.now()
    fields = dict(
        title="  Spring Climb ",
        location="Boulder Canyon",
        starts_at=now + timedelta(days=10),
        ends_at=now + timedelta(days=11),
        registration_deadline=now + timedelta(days=5),
    )
    fields.update(overrides)
    return fields


class TestGetEvent:
    """Tests for EventService.get_event."""

    def test_get_event_invalid_id_raises_error(self, event_service):
        """get_event raises InvalidIdError for malformed UUID."""
        with pytest.raises(InvalidIdError):
            event_service.get_event("123")

    def test_get_event_not_found_raises_error(self, event_service):
        """get_event raises EventNotFoundError when store returns None."""
        with pytest.raises(EventNotFoundError):
            event_service.get_event(str(uuid4()))


class TestCreateEvent:
    """Tests for EventService.create_event."""

    def test_create_defaults_to_draft(self, event_service):
        """New events are drafts with no registrants at revision 0."""
        event = event_service.create_event(**event_fields())
        assert event.is_draft
        assert event.title == "Spring Climb"
        assert event.occupancy == 0
        assert event.revision == 0
        assert event.capacity.is_unlimited

    def test_create_keeps_waiver_requirements(self, event_service, release, photo_consent):
        """Template requirements are stored as given."""
        reqs = (required(release), optional(photo_consent))
        event = event_service.create_event(**event_fields(waiver_templates=reqs))
        assert event.waiver_templates == reqs
        assert event.required_waiver_ids == {release.id}

    def test_create_rejects_unknown_template(self, event_service):
        """Every template must exist in the catalog."""
        with pytest.raises(WaiverNotFoundError):
            event_service.create_event(
                **event_fields(waiver_templates=[required(make_template("Ghost"))])
            )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"capacity": -1},
            {"fee": Decimal("-5")},
            {"fee": "abc"},
        ],
    )
    def test_create_rejects_invalid_values(self, event_service, overrides):
        """Negative capacity or fee and unparsable fees raise InvalidEventError."""
        with pytest.raises(InvalidEventError):
            event_service.create_event(**event_fields(**overrides))

    def test_create_rejects_end_before_start(self, event_service):
        """An event ending before it starts raises InvalidEventError."""
        fields = event_fields()
        fields["ends_at"] = fields["starts_at"] - timedelta(hours=1)
        with pytest.raises(InvalidEventError):
            event_service.create_event(**fields)


class TestLifecycle:
    """Tests for publish, unpublish and update_details."""

    def test_publish_and_unpublish(self, event_service):
        """Publishing opens the event, unpublishing closes it, each bumps revision."""
        event = event_service.create_event(**event_fields())
        published = event_service.publish(str(event.id))
        assert not published.is_draft
        assert published.revision == 1
        assert event_service.list_events() == [published]

        draft = event_service.unpublish(str(event.id))
        assert draft.is_draft
        assert event_service.list_events() == []
        assert event_service.list_events(include_drafts=True) == [draft]

    def test_update_details(self, event_service):
        """Editable fields are updated and coerced to domain values."""
        event = event_service.create_event(**event_fields())
        updated = event_service.update_details(
            str(event.id), title="Autumn Climb", capacity=10, fee="12.50"
        )
        assert updated.title == "Autumn Climb"
        assert updated.capacity == Capacity(10)
        assert str(updated.fee) == "12.50"

    def test_update_rejects_unknown_fields(self, event_service):
        """Registrant collections and revision cannot be edited here."""
        event = event_service.create_event(**event_fields())
        with pytest.raises(InvalidEventError):
            event_service.update_details(str(event.id), registered_users=())

    def test_capacity_cannot_drop_below_occupancy(
        self, event_service, registration_service, event_store
    ):
        """Shrinking capacity below the number of registrants is rejected."""
        event = event_service.create_event(**event_fields(is_draft=False, capacity=5))
        registration_service.register_adult(str(event.id), "u1")
        registration_service.register_adult(str(event.id), "u2")

        with pytest.raises(InvalidEventError):
            event_service.update_details(str(event.id), capacity=1)
        assert event_service.update_details(str(event.id), capacity=2).capacity == Capacity(2)
        assert event_store.get_event(event.id).find_registrant(RegistrantRef.adult("u2"))
