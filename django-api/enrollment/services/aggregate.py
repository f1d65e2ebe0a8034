"""Conditional-write loop shared by every service that mutates an Event.

A change is a pure function from the current aggregate to the next one. It
may raise a DomainError, which ends the operation. A lost compare-and-swap
re-reads the aggregate and re-applies the change, so admission checks are
always evaluated against the state that actually gets written.
"""

from typing import Callable

import structlog

from enrollment.domain import Event, EventId
from enrollment.domain.errors import (
    ConcurrencyConflictError,
    EventNotFoundError,
    InvalidIdError,
)
from enrollment.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 5


def parse_event_id(event_id: str | EventId) -> EventId:
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError) as exc:
        raise InvalidIdError("event ID") from exc


def load_event(store: EventStore, event_id: EventId) -> Event:
    event = store.get_event(event_id)
    if event is None:
        raise EventNotFoundError()
    return event


def commit_with_retry(
    store: EventStore,
    event_id: EventId,
    change: Callable[[Event], Event],
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> Event:
    """Apply change and persist it iff nobody else wrote in between.

    Raises:
        EventNotFoundError: If the event disappears.
        ConcurrencyConflictError: If every attempt lost the race.
    """
    for attempt in range(1, max_retries + 1):
        current = load_event(store, event_id)
        proposed = change(current)
        saved = store.save_event(proposed, expected_revision=current.revision)
        if saved is not None:
            return saved
        logger.info(
            "event_write_conflict",
            event_id=str(event_id),
            revision=current.revision,
            attempt=attempt,
        )
    logger.warning("event_write_retries_exhausted", event_id=str(event_id), attempts=max_retries)
    raise ConcurrencyConflictError()
