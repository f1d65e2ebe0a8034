"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from enrollment.signals import WAIVER_LIST_ALL_CACHE_KEY, WAIVER_LIST_CACHE_KEY
from enrollment.stores.django_store import DjangoWaiverTemplateStore
from tests.fakes import make_template


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_template_save_invalidates_list_cache(self, django_capture_on_commit_callbacks):
        """Saving a template invalidates both waiver list cache keys."""
        cache.set(WAIVER_LIST_CACHE_KEY, ["stale"])
        cache.set(WAIVER_LIST_ALL_CACHE_KEY, ["stale"])

        with django_capture_on_commit_callbacks(execute=True):
            DjangoWaiverTemplateStore().add_template(make_template("Photo Consent"))

        assert cache.get(WAIVER_LIST_CACHE_KEY) is None
        assert cache.get(WAIVER_LIST_ALL_CACHE_KEY) is None

    def test_archive_invalidates_list_cache(self, django_capture_on_commit_callbacks):
        """Archiving a template invalidates the active listing."""
        store = DjangoWaiverTemplateStore()
        template = store.add_template(make_template("Photo Consent"))
        cache.set(WAIVER_LIST_CACHE_KEY, ["stale"])

        with django_capture_on_commit_callbacks(execute=True):
            store.set_archived(template.id)

        assert cache.get(WAIVER_LIST_CACHE_KEY) is None

    def test_invalidation_waits_for_commit(self, django_capture_on_commit_callbacks):
        """A revision in flight does not clear the cache before it commits."""
        store = DjangoWaiverTemplateStore()
        old = store.add_template(make_template("General Release"))
        cache.set(WAIVER_LIST_CACHE_KEY, ["stale"])

        with django_capture_on_commit_callbacks() as callbacks:
            store.replace_template(old.id, make_template("General Release", version=2))
            assert cache.get(WAIVER_LIST_CACHE_KEY) == ["stale"]

        assert callbacks
        for callback in callbacks:
            callback()
        assert cache.get(WAIVER_LIST_CACHE_KEY) is None

    def test_list_endpoint_populates_cache(self, api_client, django_user_model):
        """GET /api/waivers stores the serialized listing."""
        user = django_user_model.objects.create_user(username="member", password="x")
        api_client.force_authenticate(user)
        DjangoWaiverTemplateStore().add_template(make_template("Photo Consent"))

        response = api_client.get("/api/waivers")

        assert response.status_code == 200
        cached = cache.get(WAIVER_LIST_CACHE_KEY)
        assert [t["name"] for t in cached] == ["Photo Consent"]

    def test_create_through_api_refreshes_listing(
        self, api_client, django_user_model, django_capture_on_commit_callbacks
    ):
        """A template created after a cached read shows up on the next read."""
        admin = django_user_model.objects.create_user(
            username="admin", password="x", is_staff=True
        )
        api_client.force_authenticate(admin)
        assert api_client.get("/api/waivers").json() == []

        with django_capture_on_commit_callbacks(execute=True):
            created = api_client.post(
                "/api/waivers",
                {
                    "name": "Photo Consent",
                    "document_key": "waivers/templates/photo.pdf",
                    "document_url": "https://waivers.s3.us-east-1.amazonaws.com/waivers/templates/photo.pdf",
                },
                format="json",
            )

        assert created.status_code == 201
        assert [t["name"] for t in api_client.get("/api/waivers").json()] == ["Photo Consent"]
