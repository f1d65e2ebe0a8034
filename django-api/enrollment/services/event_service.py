"""Event service - admin lifecycle of the event aggregate.

Registrant collections are never touched here; see RegistrationService.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable
from uuid import uuid4

import structlog

from enrollment.domain import Capacity, Event, EventId, Money, WaiverRequirement
from enrollment.domain.errors import InvalidEventError
from enrollment.services.aggregate import (
    DEFAULT_MAX_RETRIES,
    commit_with_retry,
    load_event,
    parse_event_id,
)
from enrollment.services.catalog_service import WaiverCatalog
from enrollment.services.registration_service import merge_requirements
from enrollment.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "location",
        "starts_at",
        "ends_at",
        "registration_deadline",
        "capacity",
        "fee",
        "images",
        "payment_ref",
    }
)


def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
    coerced = dict(changes)
    if "capacity" in coerced:
        coerced["capacity"] = Capacity(int(coerced["capacity"]))
    if "fee" in coerced:
        coerced["fee"] = Money(Decimal(coerced["fee"]))
    if "images" in coerced:
        coerced["images"] = tuple(coerced["images"])
    return coerced


class EventService:
    """Service for event catalog and admin lifecycle operations."""

    def __init__(
        self,
        store: EventStore,
        catalog: WaiverCatalog,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._max_retries = max_retries

    def list_events(self, include_drafts: bool = False) -> list[Event]:
        """Return published events, or all of them for administrators."""
        return self._store.list_events(include_drafts=include_drafts)

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        return load_event(self._store, parse_event_id(event_id))

    def create_event(
        self,
        *,
        title: str,
        location: str,
        starts_at: datetime,
        ends_at: datetime,
        registration_deadline: datetime,
        description: str = "",
        capacity: int = 0,
        fee: Decimal | int | str = 0,
        is_draft: bool = True,
        waiver_templates: Iterable[WaiverRequirement] = (),
        images: Iterable[str] = (),
        payment_ref: str | None = None,
    ) -> Event:
        """Create an event with no registrants.

        Raises:
            InvalidEventError: If dates, capacity or fee are invalid.
            WaiverNotFoundError: If a template id does not resolve.
        """
        requirements = merge_requirements(waiver_templates)
        self._catalog.resolve_all(req.waiver_id for req in requirements)
        try:
            event = Event(
                id=EventId(value=uuid4()),
                title=title.strip(),
                description=description,
                location=location.strip(),
                starts_at=starts_at,
                ends_at=ends_at,
                registration_deadline=registration_deadline,
                capacity=Capacity(int(capacity)),
                fee=Money(Decimal(fee)),
                is_draft=is_draft,
                waiver_templates=requirements,
                images=tuple(images),
                payment_ref=payment_ref,
            )
        except (ValueError, ArithmeticError) as exc:
            raise InvalidEventError(str(exc)) from exc
        created = self._store.add_event(event)
        logger.info("event_created", event_id=str(created.id), is_draft=created.is_draft)
        return created

    def update_details(self, event_id: str, **changes: Any) -> Event:
        """Edit descriptive fields, dates, capacity or fee.

        Raises:
            InvalidEventError: On an unknown field or if the result violates
                an event invariant, including capacity below occupancy.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidEventError(f"Fields not editable: {', '.join(sorted(unknown))}")
        try:
            coerced = _coerce(changes)
        except (ValueError, ArithmeticError) as exc:
            raise InvalidEventError(str(exc)) from exc

        def edit(event: Event) -> Event:
            try:
                return replace(event, **coerced)
            except ValueError as exc:
                raise InvalidEventError(str(exc)) from exc

        saved = commit_with_retry(self._store, parse_event_id(event_id), edit, self._max_retries)
        logger.info("event_updated", event_id=str(saved.id), fields=sorted(changes))
        return saved

    def publish(self, event_id: str) -> Event:
        return self._set_draft(event_id, False)

    def unpublish(self, event_id: str) -> Event:
        return self._set_draft(event_id, True)

    def _set_draft(self, event_id: str, is_draft: bool) -> Event:
        saved = commit_with_retry(
            self._store,
            parse_event_id(event_id),
            lambda event: replace(event, is_draft=is_draft),
            self._max_retries,
        )
        logger.info("event_draft_changed", event_id=str(saved.id), is_draft=is_draft)
        return saved
