"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Registrant lists are stored as embedded JSON documents on the event row and
the whole row is rewritten with a revision check, so the event is the unit
of atomicity.
"""

import uuid

from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone


class WaiverTemplate(models.Model):
    """Persistence model for waiver templates."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    document_key = models.CharField(max_length=512)
    document_url = models.URLField(max_length=1000)
    version = models.PositiveIntegerField(default=1)
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                condition=models.Q(archived=False),
                name="unique_active_waiver_name",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} v{self.version}"


class Event(models.Model):
    """Persistence model for events, including embedded registrant documents."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    registration_deadline = models.DateTimeField()
    capacity = models.PositiveIntegerField(default=0)
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_draft = models.BooleanField(default=False)
    images = models.JSONField(default=list, blank=True)
    payment_ref = models.CharField(max_length=255, blank=True, null=True)
    waiver_templates = models.JSONField(default=list, blank=True)
    registered_users = models.JSONField(default=list, blank=True)
    registered_children = models.JSONField(default=list, blank=True)
    revision = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["starts_at"], name="enrollment_event_starts_idx"),
        ]

    def __str__(self) -> str:
        return self.title
