"""Waiver catalog service.

Templates are never deleted: registrant records may reference them forever.
Replacing a document produces a new template version instead of editing the
old one, so nobody's signature silently changes meaning.
"""

from typing import Iterable
from uuid import uuid4

import structlog
from django.utils import timezone

from enrollment.domain import WaiverTemplate, WaiverTemplateId
from enrollment.domain.errors import DuplicateNameError, InvalidIdError, WaiverNotFoundError
from enrollment.stores.interfaces import WaiverTemplateStore

logger = structlog.get_logger(__name__)


def parse_waiver_id(template_id: str | WaiverTemplateId) -> WaiverTemplateId:
    if isinstance(template_id, WaiverTemplateId):
        return template_id
    try:
        return WaiverTemplateId.from_string(template_id)
    except (ValueError, TypeError) as exc:
        raise InvalidIdError("waiver ID") from exc


class WaiverCatalog:
    """Service for waiver template identities."""

    def __init__(self, store: WaiverTemplateStore) -> None:
        self._store = store

    def create(self, name: str, document_key: str, document_url: str) -> WaiverTemplate:
        """Register a new template.

        Raises:
            DuplicateNameError: If an active template already uses the name.
        """
        name = name.strip()
        if self._store.active_name_exists(name):
            raise DuplicateNameError()
        template = self._store.add_template(
            WaiverTemplate(
                id=WaiverTemplateId(value=uuid4()),
                name=name,
                document_key=document_key,
                document_url=document_url,
                version=1,
                archived=False,
                created_at=timezone.now(),
            )
        )
        logger.info("waiver_template_created", waiver_id=str(template.id), name=name)
        return template

    def get(self, template_id: str | WaiverTemplateId) -> WaiverTemplate:
        """Return a template by ID, archived or not.

        Raises:
            InvalidIdError: If the id is not a valid UUID.
            WaiverNotFoundError: If the template does not exist.
        """
        template = self._store.get_template(parse_waiver_id(template_id))
        if template is None:
            raise WaiverNotFoundError()
        return template

    def list_templates(self, include_archived: bool = False) -> list[WaiverTemplate]:
        """Return templates in creation order, hiding archived ones by default."""
        return self._store.list_templates(include_archived=include_archived)

    def resolve_all(self, template_ids: Iterable[WaiverTemplateId]) -> None:
        """Raise WaiverNotFoundError unless every id resolves."""
        for template_id in template_ids:
            self.get(template_id)

    def archive(self, template_id: str | WaiverTemplateId) -> WaiverTemplate:
        current = self.get(template_id)
        if current.archived:
            return current
        archived = self._store.set_archived(current.id)
        if archived is None:
            raise WaiverNotFoundError()
        logger.info("waiver_template_archived", waiver_id=str(current.id))
        return archived

    def revise(
        self, template_id: str | WaiverTemplateId, document_key: str, document_url: str
    ) -> WaiverTemplate:
        """Publish a new version of a template's document and archive the old one."""
        current = self.get(template_id)
        successor = self._store.replace_template(
            current.id,
            WaiverTemplate(
                id=WaiverTemplateId(value=uuid4()),
                name=current.name,
                document_key=document_key,
                document_url=document_url,
                version=current.version + 1,
                archived=False,
                created_at=timezone.now(),
            ),
        )
        logger.info(
            "waiver_template_revised",
            previous_id=str(current.id),
            waiver_id=str(successor.id),
            version=successor.version,
        )
        return successor
