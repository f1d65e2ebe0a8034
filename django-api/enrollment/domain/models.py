"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in enrollment/models.py (persistence layer).

Aggregates are immutable; every mutation returns a new instance so that a
lost compare-and-swap can simply be discarded and recomputed.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Iterator

from enrollment.domain.value_objects import (
    Capacity,
    EventId,
    Money,
    RegistrantRef,
    RegistrationId,
    WaiverTemplateId,
)


@dataclass(frozen=True)
class WaiverTemplate:
    """Domain representation of a waiver document definition."""

    id: WaiverTemplateId
    name: str
    document_key: str
    document_url: str
    version: int
    archived: bool
    created_at: datetime


@dataclass(frozen=True)
class WaiverRequirement:
    """An event-level (template, required) pair."""

    waiver_id: WaiverTemplateId
    required: bool = True


@dataclass(frozen=True)
class WaiverEntry:
    """One registrant's signing state for one template."""

    waiver_id: WaiverTemplateId
    signed: bool = False


@dataclass(frozen=True)
class RegistrantRecord:
    """Waiver ledger for an adult, or for a child when child_id is set."""

    id: RegistrationId
    user_id: str
    waivers: tuple[WaiverEntry, ...]
    registered_at: datetime
    child_id: str | None = None

    @property
    def ref(self) -> RegistrantRef:
        return RegistrantRef(user_id=self.user_id, child_id=self.child_id)

    @property
    def is_child(self) -> bool:
        return self.child_id is not None

    def entry_for(self, waiver_id: WaiverTemplateId) -> WaiverEntry | None:
        for entry in self.waivers:
            if entry.waiver_id == waiver_id:
                return entry
        return None

    def signed_waiver_ids(self) -> frozenset[WaiverTemplateId]:
        return frozenset(entry.waiver_id for entry in self.waivers if entry.signed)

    def with_signed(self, waiver_id: WaiverTemplateId) -> "RegistrantRecord":
        """Return a copy with the given entry flipped to signed. Never unsigns."""
        waivers = tuple(
            WaiverEntry(waiver_id=entry.waiver_id, signed=True)
            if entry.waiver_id == waiver_id
            else entry
            for entry in self.waivers
        )
        return replace(self, waivers=waivers)

    def with_unsigned_entries(
        self, waiver_ids: Iterable[WaiverTemplateId]
    ) -> "RegistrantRecord":
        """Append unsigned entries for ids this record does not track yet."""
        known = {entry.waiver_id for entry in self.waivers}
        additions = []
        for waiver_id in waiver_ids:
            if waiver_id not in known:
                known.add(waiver_id)
                additions.append(WaiverEntry(waiver_id=waiver_id))
        if not additions:
            return self
        return replace(self, waivers=self.waivers + tuple(additions))


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event aggregate."""

    id: EventId
    title: str
    description: str
    location: str
    starts_at: datetime
    ends_at: datetime
    registration_deadline: datetime
    capacity: Capacity
    fee: Money
    is_draft: bool = False
    waiver_templates: tuple[WaiverRequirement, ...] = ()
    registered_users: tuple[RegistrantRecord, ...] = ()
    registered_children: tuple[RegistrantRecord, ...] = ()
    images: tuple[str, ...] = ()
    payment_ref: str | None = None
    revision: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.starts_at > self.ends_at:
            raise ValueError("Event cannot end before it starts")
        if not self.capacity.is_unlimited and self.occupancy > self.capacity.value:
            raise ValueError("Capacity cannot be lower than current occupancy")

    @property
    def occupancy(self) -> int:
        return len(self.registered_users) + len(self.registered_children)

    @property
    def template_ids(self) -> frozenset[WaiverTemplateId]:
        return frozenset(req.waiver_id for req in self.waiver_templates)

    @property
    def required_waiver_ids(self) -> frozenset[WaiverTemplateId]:
        return frozenset(req.waiver_id for req in self.waiver_templates if req.required)

    def registrants(self) -> Iterator[RegistrantRecord]:
        yield from self.registered_users
        yield from self.registered_children

    def find_registrant(self, ref: RegistrantRef) -> RegistrantRecord | None:
        pool = self.registered_children if ref.is_child else self.registered_users
        for record in pool:
            if record.ref == ref:
                return record
        return None

    def with_registrant(self, record: RegistrantRecord) -> "Event":
        if record.is_child:
            return replace(self, registered_children=self.registered_children + (record,))
        return replace(self, registered_users=self.registered_users + (record,))

    def without_registrant(self, ref: RegistrantRef) -> "Event":
        if ref.is_child:
            kept = tuple(r for r in self.registered_children if r.ref != ref)
            return replace(self, registered_children=kept)
        kept = tuple(r for r in self.registered_users if r.ref != ref)
        return replace(self, registered_users=kept)

    def with_updated_registrant(self, record: RegistrantRecord) -> "Event":
        """Swap in a record by id, keeping list order."""
        if record.is_child:
            children = tuple(record if r.id == record.id else r for r in self.registered_children)
            return replace(self, registered_children=children)
        users = tuple(record if r.id == record.id else r for r in self.registered_users)
        return replace(self, registered_users=users)


@dataclass(frozen=True)
class StoredDocument:
    """A file held by the document storage collaborator."""

    key: str
    name: str
    url: str
    size: int
    modified_at: datetime | None


@dataclass(frozen=True)
class DocumentPage:
    items: tuple[StoredDocument, ...]
    page: int
    limit: int
    total_items: int
    total_pages: int
