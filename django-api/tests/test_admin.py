"""Tests for the Django admin registrations.

Run with: pytest tests/test_admin.py -v
"""

import pytest
from django.contrib import admin
from django.test import RequestFactory

from enrollment.models import Event, WaiverTemplate


@pytest.fixture
def superuser_request(django_user_model):
    request = RequestFactory().get("/admin/")
    request.user = django_user_model.objects.create_superuser(
        username="root", email="root@example.com", password="x"
    )
    return request


@pytest.fixture
def template_row(db) -> WaiverTemplate:
    return WaiverTemplate.objects.create(
        name="General Release",
        document_key="waivers/templates/release.pdf",
        document_url="https://waivers.s3.us-east-1.amazonaws.com/waivers/templates/release.pdf",
    )


@pytest.mark.django_db
class TestWaiverTemplateAdmin:
    """Signed waiver content cannot be edited from the admin."""

    def test_change_and_delete_are_disabled(self, superuser_request, template_row):
        model_admin = admin.site._registry[WaiverTemplate]
        assert not model_admin.has_change_permission(superuser_request, template_row)
        assert not model_admin.has_delete_permission(superuser_request, template_row)

    def test_content_fields_are_read_only(self, superuser_request, template_row):
        """Name, document and archive flag only change through the catalog."""
        model_admin = admin.site._registry[WaiverTemplate]
        readonly = model_admin.get_readonly_fields(superuser_request, template_row)
        for field in ("name", "document_key", "document_url", "version", "archived"):
            assert field in readonly


@pytest.mark.django_db
class TestEventAdmin:
    def test_event_writes_are_disabled(self, superuser_request):
        model_admin = admin.site._registry[Event]
        assert not model_admin.has_add_permission(superuser_request)
        assert not model_admin.has_change_permission(superuser_request)
        assert not model_admin.has_delete_permission(superuser_request)
