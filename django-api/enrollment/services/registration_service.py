"""Registration service - the registrant mutation surface.

Services:
- Depend only on interfaces (stores, collaborators)
- Validate domain invariants
- Apply every aggregate change through a single conditional write
- Return domain models or raise domain errors
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable

import structlog
from django.utils import timezone

from enrollment.domain import (
    Event,
    RegistrantRecord,
    RegistrantRef,
    RegistrationId,
    WaiverRequirement,
    WaiverTemplateId,
)
from enrollment.domain.compliance import (
    ComplianceStatus,
    ComplianceSummary,
    aggregate_compliance,
    check_admission,
    compliance_of,
    snapshot_entries,
)
from enrollment.domain.errors import (
    AlreadyRegisteredError,
    AlreadySignedError,
    AtCapacityError,
    ChildNotFoundError,
    DeadlinePassedError,
    ErrorCode,
    EventIsDraftError,
    NotRegisteredError,
    WaiverNotApplicableError,
)
from enrollment.services.aggregate import (
    DEFAULT_MAX_RETRIES,
    commit_with_retry,
    load_event,
    parse_event_id,
)
from enrollment.services.catalog_service import WaiverCatalog, parse_waiver_id
from enrollment.stores.interfaces import EventStore, IdentityDirectory

logger = structlog.get_logger(__name__)

_REJECTIONS = {
    ErrorCode.EVENT_IS_DRAFT: EventIsDraftError,
    ErrorCode.DEADLINE_PASSED: DeadlinePassedError,
    ErrorCode.AT_CAPACITY: AtCapacityError,
}


def merge_requirements(
    requirements: Iterable[WaiverRequirement],
) -> tuple[WaiverRequirement, ...]:
    """Collapse repeated template ids, keeping first position. Required wins."""
    merged: dict[WaiverTemplateId, bool] = {}
    for req in requirements:
        merged[req.waiver_id] = merged.get(req.waiver_id, False) or req.required
    return tuple(WaiverRequirement(waiver_id=k, required=v) for k, v in merged.items())


class RegistrationService:
    """Service for registering, unregistering and signing waivers."""

    def __init__(
        self,
        store: EventStore,
        identity: IdentityDirectory,
        catalog: WaiverCatalog,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._store = store
        self._identity = identity
        self._catalog = catalog
        self._max_retries = max_retries

    def register_adult(
        self, event_id: str, user_id: str, now: datetime | None = None
    ) -> RegistrationId:
        """Register a user for an event.

        Raises:
            EventIsDraftError, DeadlinePassedError, AtCapacityError,
            AlreadyRegisteredError, EventNotFoundError.
        """
        return self._register(event_id, RegistrantRef.adult(user_id), now)

    def register_child(
        self,
        event_id: str,
        parent_user_id: str,
        child_id: str,
        now: datetime | None = None,
    ) -> RegistrationId:
        """Register one of a parent's children for an event.

        Raises:
            ChildNotFoundError: If the child does not belong to the parent.
            Otherwise the same errors as register_adult.
        """
        if str(child_id) not in self._identity.child_ids(str(parent_user_id)):
            raise ChildNotFoundError()
        return self._register(event_id, RegistrantRef.child(parent_user_id, child_id), now)

    def _register(
        self, event_id: str, ref: RegistrantRef, now: datetime | None
    ) -> RegistrationId:
        eid = parse_event_id(event_id)
        now = now or timezone.now()
        registration_id = RegistrationId.new()

        def admit(event: Event) -> Event:
            admission = check_admission(event, now)
            if not admission.admitted:
                raise _REJECTIONS[admission.reason]()
            if event.find_registrant(ref) is not None:
                raise AlreadyRegisteredError()
            record = RegistrantRecord(
                id=registration_id,
                user_id=ref.user_id,
                child_id=ref.child_id,
                waivers=snapshot_entries(event),
                registered_at=now,
            )
            return event.with_registrant(record)

        try:
            saved = commit_with_retry(self._store, eid, admit, self._max_retries)
        except (
            EventIsDraftError,
            DeadlinePassedError,
            AtCapacityError,
            AlreadyRegisteredError,
        ) as exc:
            logger.info(
                "registration_rejected",
                event_id=str(eid),
                registrant=str(ref),
                reason=exc.code.value,
            )
            raise
        logger.info(
            "registrant_registered",
            event_id=str(eid),
            registrant=str(ref),
            registration_id=str(registration_id),
            occupancy=saved.occupancy,
        )
        return registration_id

    def unregister(self, event_id: str, ref: RegistrantRef) -> None:
        """Remove a registrant's record, releasing its seat in the same write.

        Raises:
            NotRegisteredError: If there is no active record for ref.
        """
        eid = parse_event_id(event_id)

        def remove(event: Event) -> Event:
            if event.find_registrant(ref) is None:
                raise NotRegisteredError()
            return event.without_registrant(ref)

        saved = commit_with_retry(self._store, eid, remove, self._max_retries)
        logger.info(
            "registrant_unregistered",
            event_id=str(eid),
            registrant=str(ref),
            occupancy=saved.occupancy,
        )

    def record_signing(
        self, event_id: str, ref: RegistrantRef, waiver_id: str | WaiverTemplateId
    ) -> ComplianceStatus:
        """Mark one waiver entry as signed. Entries never go back to unsigned.

        Raises:
            NotRegisteredError: If there is no active record for ref.
            WaiverNotApplicableError: If the record has no entry for the waiver,
                or the waiver is no longer attached to the event.
            AlreadySignedError: If the entry is already signed.
        """
        eid = parse_event_id(event_id)
        wid = parse_waiver_id(waiver_id)

        def sign(event: Event) -> Event:
            record = event.find_registrant(ref)
            if record is None:
                raise NotRegisteredError()
            entry = record.entry_for(wid)
            if entry is None or wid not in event.template_ids:
                raise WaiverNotApplicableError()
            if entry.signed:
                raise AlreadySignedError()
            return event.with_updated_registrant(record.with_signed(wid))

        saved = commit_with_retry(self._store, eid, sign, self._max_retries)
        status = compliance_of(saved.find_registrant(ref), saved)
        logger.info(
            "waiver_signed",
            event_id=str(eid),
            registrant=str(ref),
            waiver_id=str(wid),
            compliant=status.compliant,
        )
        return status

    def reconcile_templates(
        self, event_id: str, requirements: Iterable[WaiverRequirement]
    ) -> Event:
        """Replace the event's waiver set.

        Newly required templates are appended unsigned to every existing
        record. Templates dropped from the event stay in old records for
        audit and are ignored by compliance from then on.

        Raises:
            WaiverNotFoundError: If a template id does not resolve.
        """
        eid = parse_event_id(event_id)
        merged = merge_requirements(requirements)
        self._catalog.resolve_all(req.waiver_id for req in merged)
        required_ids = [req.waiver_id for req in merged if req.required]

        def reconcile(event: Event) -> Event:
            users = tuple(r.with_unsigned_entries(required_ids) for r in event.registered_users)
            children = tuple(
                r.with_unsigned_entries(required_ids) for r in event.registered_children
            )
            return replace(
                event,
                waiver_templates=merged,
                registered_users=users,
                registered_children=children,
            )

        saved = commit_with_retry(self._store, eid, reconcile, self._max_retries)
        logger.info(
            "templates_reconciled",
            event_id=str(eid),
            templates=len(merged),
            required=len(required_ids),
            registrants=saved.occupancy,
        )
        return saved

    def registrant_compliance(
        self, event_id: str, ref: RegistrantRef
    ) -> tuple[RegistrantRecord, ComplianceStatus]:
        """Return a registrant's record with its compliance, from one snapshot.

        Raises:
            NotRegisteredError: If there is no active record for ref.
        """
        event = load_event(self._store, parse_event_id(event_id))
        record = event.find_registrant(ref)
        if record is None:
            raise NotRegisteredError()
        return record, compliance_of(record, event)

    def compliance_for(self, event_id: str, ref: RegistrantRef) -> ComplianceStatus:
        return self.registrant_compliance(event_id, ref)[1]

    def compliance_summary(self, event_id: str) -> ComplianceSummary:
        return aggregate_compliance(load_event(self._store, parse_event_id(event_id)))
