"""Store and collaborator interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from enrollment.domain import (
    Event,
    EventId,
    StoredDocument,
    WaiverTemplate,
    WaiverTemplateId,
)


class EventStore(ABC):
    """Interface for event document persistence with optimistic concurrency."""

    @abstractmethod
    def list_events(self, include_drafts: bool = False) -> list[Event]:
        """Return events ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> Event:
        """Persist a new event at revision 0."""
        ...

    @abstractmethod
    def save_event(self, event: Event, expected_revision: int) -> Event | None:
        """Write the whole aggregate iff the stored revision still matches.

        Returns the event with its bumped revision, or None when another
        writer committed first.
        """
        ...


class WaiverTemplateStore(ABC):
    """Interface for waiver template persistence."""

    @abstractmethod
    def list_templates(self, include_archived: bool = False) -> list[WaiverTemplate]:
        """Return templates in creation order."""
        ...

    @abstractmethod
    def get_template(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        ...

    @abstractmethod
    def active_name_exists(self, name: str) -> bool:
        """Check for a non-archived template with this name, ignoring case."""
        ...

    @abstractmethod
    def add_template(self, template: WaiverTemplate) -> WaiverTemplate:
        """Persist a new template. Raises DuplicateNameError on an active name clash."""
        ...

    @abstractmethod
    def set_archived(self, template_id: WaiverTemplateId) -> WaiverTemplate | None:
        ...

    @abstractmethod
    def replace_template(
        self, previous_id: WaiverTemplateId, successor: WaiverTemplate
    ) -> WaiverTemplate:
        """Archive the previous template and add its successor in one unit."""
        ...


class DocumentStorage(ABC):
    """Interface for the object storage holding waiver PDFs."""

    @abstractmethod
    def list_objects(self, prefix: str) -> list[StoredDocument]:
        """Return every object under prefix. Pagination is the caller's job."""
        ...

    @abstractmethod
    def upload(self, key: str, content: bytes, content_type: str) -> StoredDocument:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class IdentityDirectory(ABC):
    """Interface for the identity collaborator."""

    @abstractmethod
    def is_admin(self, user_id: str) -> bool:
        ...

    @abstractmethod
    def child_ids(self, parent_id: str) -> frozenset[str]:
        """Return the ids of the children registered under a parent."""
        ...
