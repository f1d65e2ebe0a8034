"""Django ORM implementation of the enrollment stores."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from enrollment import models
from enrollment.domain import (
    Capacity,
    Event,
    EventId,
    Money,
    RegistrantRecord,
    RegistrationId,
    WaiverEntry,
    WaiverRequirement,
    WaiverTemplate,
    WaiverTemplateId,
)
from enrollment.domain.errors import CollaboratorUnavailableError, DuplicateNameError
from enrollment.stores.interfaces import EventStore, WaiverTemplateStore

logger = structlog.get_logger(__name__)

STORAGE = "Event storage"


def _entries_to_json(entries: tuple[WaiverEntry, ...]) -> list[dict[str, Any]]:
    return [{"waiverId": str(e.waiver_id), "signed": e.signed} for e in entries]


def _entries_from_json(raw: list[dict[str, Any]]) -> tuple[WaiverEntry, ...]:
    return tuple(
        WaiverEntry(
            waiver_id=WaiverTemplateId.from_string(item["waiverId"]),
            signed=bool(item.get("signed", False)),
        )
        for item in raw
    )


def registrant_to_json(record: RegistrantRecord) -> dict[str, Any]:
    doc: dict[str, Any] = {"id": str(record.id)}
    if record.is_child:
        doc["parent"] = record.user_id
        doc["childId"] = record.child_id
    else:
        doc["user"] = record.user_id
    doc["registeredAt"] = record.registered_at.isoformat()
    doc["waiversSigned"] = _entries_to_json(record.waivers)
    return doc


def registrant_from_json(doc: dict[str, Any]) -> RegistrantRecord:
    child_id = doc.get("childId")
    return RegistrantRecord(
        id=RegistrationId.from_string(doc["id"]),
        user_id=doc["parent"] if child_id is not None else doc["user"],
        child_id=child_id,
        waivers=_entries_from_json(doc.get("waiversSigned", [])),
        registered_at=datetime.fromisoformat(doc["registeredAt"]),
    )


def _requirements_to_json(reqs: tuple[WaiverRequirement, ...]) -> list[dict[str, Any]]:
    return [{"waiverId": str(r.waiver_id), "required": r.required} for r in reqs]


def _requirements_from_json(raw: list[dict[str, Any]]) -> tuple[WaiverRequirement, ...]:
    return tuple(
        WaiverRequirement(
            waiver_id=WaiverTemplateId.from_string(item["waiverId"]),
            required=bool(item.get("required", True)),
        )
        for item in raw
    )


def _event_fields(event: Event) -> dict[str, Any]:
    """Columns written on every aggregate save."""
    return {
        "title": event.title,
        "description": event.description,
        "location": event.location,
        "starts_at": event.starts_at,
        "ends_at": event.ends_at,
        "registration_deadline": event.registration_deadline,
        "capacity": event.capacity.value,
        "fee": event.fee.amount,
        "is_draft": event.is_draft,
        "images": list(event.images),
        "payment_ref": event.payment_ref,
        "waiver_templates": _requirements_to_json(event.waiver_templates),
        "registered_users": [registrant_to_json(r) for r in event.registered_users],
        "registered_children": [registrant_to_json(r) for r in event.registered_children],
    }


def _event_from_row(row: models.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        title=row.title,
        description=row.description,
        location=row.location,
        starts_at=row.starts_at,
        ends_at=row.ends_at,
        registration_deadline=row.registration_deadline,
        capacity=Capacity(row.capacity),
        fee=Money(Decimal(row.fee)),
        is_draft=row.is_draft,
        waiver_templates=_requirements_from_json(row.waiver_templates),
        registered_users=tuple(registrant_from_json(d) for d in row.registered_users),
        registered_children=tuple(registrant_from_json(d) for d in row.registered_children),
        images=tuple(row.images),
        payment_ref=row.payment_ref,
        revision=row.revision,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _template_from_row(row: models.WaiverTemplate) -> WaiverTemplate:
    return WaiverTemplate(
        id=WaiverTemplateId(value=row.id),
        name=row.name,
        document_key=row.document_key,
        document_url=row.document_url,
        version=row.version,
        archived=row.archived,
        created_at=row.created_at,
    )


class DjangoEventStore(EventStore):
    """Relational-backed event store; registrants live in JSON columns."""

    def list_events(self, include_drafts: bool = False) -> list[Event]:
        qs = models.Event.objects.all()
        if not include_drafts:
            qs = qs.filter(is_draft=False)
        try:
            return [_event_from_row(row) for row in qs]
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc

    def get_event(self, event_id: EventId) -> Event | None:
        try:
            row = models.Event.objects.filter(pk=event_id.value).first()
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _event_from_row(row) if row is not None else None

    def add_event(self, event: Event) -> Event:
        try:
            row = models.Event.objects.create(id=event.id.value, revision=0, **_event_fields(event))
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _event_from_row(row)

    def save_event(self, event: Event, expected_revision: int) -> Event | None:
        now = timezone.now()
        try:
            updated = models.Event.objects.filter(
                pk=event.id.value, revision=expected_revision
            ).update(
                **_event_fields(event),
                revision=expected_revision + 1,
                updated_at=now,
            )
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        if not updated:
            logger.debug(
                "event_revision_mismatch",
                event_id=str(event.id),
                expected_revision=expected_revision,
            )
            return None
        return replace(event, revision=expected_revision + 1, updated_at=now)


class DjangoWaiverTemplateStore(WaiverTemplateStore):
    """Relational-backed waiver template store."""

    def list_templates(self, include_archived: bool = False) -> list[WaiverTemplate]:
        qs = models.WaiverTemplate.objects.order_by("created_at", "id")
        if not include_archived:
            qs = qs.filter(archived=False)
        try:
            return [_template_from_row(row) for row in qs]
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc

    def get_template(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        try:
            row = models.WaiverTemplate.objects.filter(pk=template_id.value).first()
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _template_from_row(row) if row is not None else None

    def active_name_exists(self, name: str) -> bool:
        try:
            return models.WaiverTemplate.objects.filter(
                name__iexact=name, archived=False
            ).exists()
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc

    def add_template(self, template: WaiverTemplate) -> WaiverTemplate:
        try:
            with transaction.atomic():
                row = self._insert(template)
        except IntegrityError as exc:
            raise DuplicateNameError() from exc
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _template_from_row(row)

    def set_archived(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        try:
            row = models.WaiverTemplate.objects.filter(pk=template_id.value).first()
            if row is None:
                return None
            row.archived = True
            row.save(update_fields=["archived"])
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _template_from_row(row)

    def replace_template(
        self, previous_id: WaiverTemplateId, successor: WaiverTemplate
    ) -> WaiverTemplate:
        try:
            with transaction.atomic():
                models.WaiverTemplate.objects.filter(pk=previous_id.value).update(archived=True)
                row = self._insert(successor)
        except IntegrityError as exc:
            raise DuplicateNameError() from exc
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(STORAGE) from exc
        return _template_from_row(row)

    @staticmethod
    def _insert(template: WaiverTemplate) -> models.WaiverTemplate:
        return models.WaiverTemplate.objects.create(
            id=template.id.value,
            name=template.name,
            document_key=template.document_key,
            document_url=template.document_url,
            version=template.version,
            archived=template.archived,
            created_at=template.created_at,
        )
