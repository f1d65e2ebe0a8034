"""Compliance rules over an Event snapshot.

Everything here is a pure function of its arguments. Results are never
cached: a registrant's waiver state must always reflect the latest
committed aggregate.
"""

from dataclasses import dataclass
from datetime import datetime

from enrollment.domain.errors import ErrorCode
from enrollment.domain.models import Event, RegistrantRecord, WaiverEntry
from enrollment.domain.value_objects import RegistrationId, WaiverTemplateId


@dataclass(frozen=True)
class Admission:
    """Outcome of an admissibility check. reason is None when admitted."""

    reason: ErrorCode | None = None

    @property
    def admitted(self) -> bool:
        return self.reason is None


@dataclass(frozen=True)
class ComplianceStatus:
    compliant: bool
    missing: frozenset[WaiverTemplateId]


@dataclass(frozen=True)
class ComplianceSummary:
    total_registrants: int
    compliant_count: int
    non_compliant_ids: tuple[RegistrationId, ...]


def check_admission(event: Event, now: datetime) -> Admission:
    """Decide whether one more registrant may join.

    Draft status is checked first since the deadline and capacity of an
    unpublished event are not meaningful yet, then the deadline, then seats.
    """
    if event.is_draft:
        return Admission(ErrorCode.EVENT_IS_DRAFT)
    if now >= event.registration_deadline:
        return Admission(ErrorCode.DEADLINE_PASSED)
    if not event.capacity.has_room_for_one_more(event.occupancy):
        return Admission(ErrorCode.AT_CAPACITY)
    return Admission()


def snapshot_entries(event: Event) -> tuple[WaiverEntry, ...]:
    """Unsigned entries for every template currently attached to the event."""
    return tuple(WaiverEntry(waiver_id=req.waiver_id) for req in event.waiver_templates)


def compliance_of(record: RegistrantRecord, event: Event) -> ComplianceStatus:
    missing = event.required_waiver_ids - record.signed_waiver_ids()
    return ComplianceStatus(compliant=not missing, missing=frozenset(missing))


def aggregate_compliance(event: Event) -> ComplianceSummary:
    total = 0
    non_compliant: list[RegistrationId] = []
    for record in event.registrants():
        total += 1
        if not compliance_of(record, event).compliant:
            non_compliant.append(record.id)
    return ComplianceSummary(
        total_registrants=total,
        compliant_count=total - len(non_compliant),
        non_compliant_ids=tuple(non_compliant),
    )
