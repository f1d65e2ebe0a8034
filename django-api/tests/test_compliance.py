"""Unit tests for the compliance rules.

Run with: pytest tests/test_compliance.py -v
"""

from datetime import timedelta

from enrollment.domain import Capacity, RegistrantRecord, RegistrationId, WaiverEntry
from enrollment.domain.compliance import (
    aggregate_compliance,
    check_admission,
    compliance_of,
    snapshot_entries,
)
from enrollment.domain.errors import ErrorCode
from tests.fakes import make_event, make_template, optional, required

W1 = make_template("W1")
W2 = make_template("W2")


def record_with(*entries, user_id="u1") -> RegistrantRecord:
    return RegistrantRecord(
        id=RegistrationId.new(),
        user_id=user_id,
        waivers=tuple(entries),
        registered_at=make_event().starts_at,
    )


class TestCheckAdmission:
    """Tests for admissibility checks."""

    def test_open_event_admits(self):
        """A published event before its deadline with free seats admits."""
        event = make_event()
        assert check_admission(event, event.registration_deadline - timedelta(seconds=1)).admitted

    def test_draft_is_checked_first(self):
        """A full draft event past its deadline reports EVENT_IS_DRAFT."""
        event = make_event(
            is_draft=True,
            capacity=Capacity(1),
            registered_users=(record_with(),),
        )
        admission = check_admission(event, event.registration_deadline + timedelta(days=1))
        assert admission.reason is ErrorCode.EVENT_IS_DRAFT

    def test_deadline_before_capacity(self):
        """A full event past its deadline reports DEADLINE_PASSED."""
        event = make_event(capacity=Capacity(1), registered_users=(record_with(),))
        admission = check_admission(event, event.registration_deadline + timedelta(days=1))
        assert admission.reason is ErrorCode.DEADLINE_PASSED

    def test_deadline_is_exclusive(self):
        """Registering exactly at the deadline is too late."""
        event = make_event()
        admission = check_admission(event, event.registration_deadline)
        assert admission.reason is ErrorCode.DEADLINE_PASSED

    def test_full_event_rejected(self):
        """No seats left reports AT_CAPACITY."""
        event = make_event(capacity=Capacity(1), registered_users=(record_with(),))
        admission = check_admission(event, event.registration_deadline - timedelta(days=1))
        assert admission.reason is ErrorCode.AT_CAPACITY


class TestComplianceOf:
    """Tests for per-registrant compliance."""

    def test_missing_required_waiver(self):
        """An unsigned required waiver is reported missing; optional ones are not."""
        event = make_event(waiver_templates=(required(W1), optional(W2)))
        status = compliance_of(record_with(WaiverEntry(W1.id), WaiverEntry(W2.id)), event)
        assert not status.compliant
        assert status.missing == {W1.id}

    def test_all_required_signed(self):
        """Signing every required waiver makes the registrant compliant."""
        event = make_event(waiver_templates=(required(W1), optional(W2)))
        status = compliance_of(record_with(WaiverEntry(W1.id, signed=True), WaiverEntry(W2.id)), event)
        assert status.compliant
        assert status.missing == frozenset()

    def test_required_template_without_entry_is_missing(self):
        """A required template absent from the record counts as unsigned."""
        event = make_event(waiver_templates=(required(W1),))
        assert compliance_of(record_with(), event).missing == {W1.id}

    def test_removed_template_entries_are_ignored(self):
        """Entries for templates no longer on the event do not matter."""
        event = make_event(waiver_templates=(required(W2),))
        status = compliance_of(record_with(WaiverEntry(W1.id), WaiverEntry(W2.id, signed=True)), event)
        assert status.compliant


class TestAggregateCompliance:
    """Tests for the event-wide compliance summary."""

    def test_counts_adults_and_children(self):
        """Summary spans both collections and lists the non-compliant records."""
        compliant = record_with(WaiverEntry(W1.id, signed=True), user_id="u1")
        pending = record_with(WaiverEntry(W1.id), user_id="u2")
        child = RegistrantRecord(
            id=RegistrationId.new(),
            user_id="u2",
            child_id="c1",
            waivers=(WaiverEntry(W1.id),),
            registered_at=make_event().starts_at,
        )
        event = make_event(
            waiver_templates=(required(W1),),
            registered_users=(compliant, pending),
            registered_children=(child,),
        )
        summary = aggregate_compliance(event)
        assert summary.total_registrants == 3
        assert summary.compliant_count == 1
        assert summary.non_compliant_ids == (pending.id, child.id)

    def test_empty_event(self):
        """An event without registrants has nothing to report."""
        summary = aggregate_compliance(make_event())
        assert (summary.total_registrants, summary.compliant_count) == (0, 0)


def test_snapshot_entries_follow_template_order():
    """New registrations get one unsigned entry per event template, in order."""
    event = make_event(waiver_templates=(required(W1), optional(W2)))
    assert snapshot_entries(event) == (WaiverEntry(W1.id), WaiverEntry(W2.id))
