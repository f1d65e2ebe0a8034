"""In-memory stores and collaborators for service tests."""

import threading
from dataclasses import replace
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from django.utils import timezone

from enrollment.domain import (
    Capacity,
    Event,
    EventId,
    Money,
    StoredDocument,
    WaiverRequirement,
    WaiverTemplate,
    WaiverTemplateId,
)
from enrollment.domain.errors import DuplicateNameError
from enrollment.stores.interfaces import (
    DocumentStorage,
    EventStore,
    IdentityDirectory,
    WaiverTemplateStore,
)


def make_event(**overrides) -> Event:
    now = timezone.now()
    fields = dict(
        id=EventId(value=uuid4()),
        title="Spring Climb",
        description="",
        location="Boulder Canyon",
        starts_at=now + timedelta(days=10),
        ends_at=now + timedelta(days=11),
        registration_deadline=now + timedelta(days=5),
        capacity=Capacity(0),
        fee=Money(Decimal("0")),
    )
    fields.update(overrides)
    return Event(**fields)


def make_template(name: str = "General Release", **overrides) -> WaiverTemplate:
    fields = dict(
        id=WaiverTemplateId(value=uuid4()),
        name=name,
        document_key=f"waivers/templates/{name}.pdf",
        document_url=f"https://waivers.s3.us-east-1.amazonaws.com/waivers/templates/{name}.pdf",
        version=1,
        archived=False,
        created_at=timezone.now(),
    )
    fields.update(overrides)
    return WaiverTemplate(**fields)


def required(template: WaiverTemplate) -> WaiverRequirement:
    return WaiverRequirement(waiver_id=template.id, required=True)


def optional(template: WaiverTemplate) -> WaiverRequirement:
    return WaiverRequirement(waiver_id=template.id, required=False)


class InMemoryEventStore(EventStore):
    """Compare-and-swap store guarded by a lock, like a single document row."""

    def __init__(self, *events: Event) -> None:
        self._lock = threading.Lock()
        self._events = {event.id: event for event in events}
        self.save_attempts = 0

    def list_events(self, include_drafts: bool = False) -> list[Event]:
        with self._lock:
            events = sorted(self._events.values(), key=lambda e: e.starts_at)
        return [e for e in events if include_drafts or not e.is_draft]

    def get_event(self, event_id: EventId) -> Event | None:
        with self._lock:
            return self._events.get(event_id)

    def add_event(self, event: Event) -> Event:
        with self._lock:
            stored = replace(event, revision=0)
            self._events[event.id] = stored
            return stored

    def save_event(self, event: Event, expected_revision: int) -> Event | None:
        with self._lock:
            self.save_attempts += 1
            current = self._events.get(event.id)
            if current is None or current.revision != expected_revision:
                return None
            stored = replace(event, revision=expected_revision + 1)
            self._events[event.id] = stored
            return stored


class RacingEventStore(InMemoryEventStore):
    """Holds every worker's first read until all of them have read.

    That forces all workers to start from the same revision, so every
    write after the first one is a lost race.
    """

    def __init__(self, workers: int, *events: Event) -> None:
        super().__init__(*events)
        self._barrier = threading.Barrier(workers)
        self._local = threading.local()

    def get_event(self, event_id: EventId) -> Event | None:
        event = super().get_event(event_id)
        if not getattr(self._local, "released", False):
            self._local.released = True
            self._barrier.wait(timeout=10)
        return event


class ConflictingEventStore(InMemoryEventStore):
    """Every conditional write loses."""

    def save_event(self, event: Event, expected_revision: int) -> Event | None:
        with self._lock:
            self.save_attempts += 1
        return None


class InMemoryWaiverTemplateStore(WaiverTemplateStore):
    def __init__(self, *templates: WaiverTemplate) -> None:
        self._templates: dict[WaiverTemplateId, WaiverTemplate] = {t.id: t for t in templates}

    def list_templates(self, include_archived: bool = False) -> list[WaiverTemplate]:
        return [t for t in self._templates.values() if include_archived or not t.archived]

    def get_template(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        return self._templates.get(template_id)

    def active_name_exists(self, name: str) -> bool:
        return any(
            t.name.lower() == name.lower() and not t.archived for t in self._templates.values()
        )

    def add_template(self, template: WaiverTemplate) -> WaiverTemplate:
        if self.active_name_exists(template.name):
            raise DuplicateNameError()
        self._templates[template.id] = template
        return template

    def set_archived(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        template = self._templates.get(template_id)
        if template is None:
            return None
        self._templates[template_id] = replace(template, archived=True)
        return self._templates[template_id]

    def replace_template(
        self, previous_id: WaiverTemplateId, successor: WaiverTemplate
    ) -> WaiverTemplate:
        self.set_archived(previous_id)
        return self.add_template(successor)


class FakeIdentityDirectory(IdentityDirectory):
    def __init__(self, admins=(), children=None) -> None:
        self._admins = set(admins)
        self._children = {parent: frozenset(ids) for parent, ids in (children or {}).items()}

    def is_admin(self, user_id: str) -> bool:
        return user_id in self._admins

    def child_ids(self, parent_id: str) -> frozenset[str]:
        return self._children.get(parent_id, frozenset())


class FakeDocumentStorage(DocumentStorage):
    def __init__(self, *keys: str) -> None:
        self.objects = {key: b"%PDF-1.7" for key in keys}

    def _document(self, key: str) -> StoredDocument:
        return StoredDocument(
            key=key,
            name=key.rsplit("/", 1)[-1],
            url=f"https://waivers.s3.us-east-1.amazonaws.com/{key}",
            size=len(self.objects[key]),
            modified_at=None,
        )

    def list_objects(self, prefix: str) -> list[StoredDocument]:
        return [self._document(key) for key in self.objects if key.startswith(prefix)]

    def upload(self, key: str, content: bytes, content_type: str) -> StoredDocument:
        self.objects[key] = content
        return self._document(key)

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
