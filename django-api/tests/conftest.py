"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from enrollment.services.catalog_service import WaiverCatalog
from enrollment.services.event_service import EventService
from enrollment.services.registration_service import RegistrationService
from tests.fakes import (
    FakeIdentityDirectory,
    InMemoryEventStore,
    InMemoryWaiverTemplateStore,
    make_template,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def release():
    return make_template("General Release")


@pytest.fixture
def photo_consent():
    return make_template("Photo Consent")


@pytest.fixture
def catalog(release, photo_consent) -> WaiverCatalog:
    return WaiverCatalog(InMemoryWaiverTemplateStore(release, photo_consent))


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def identity() -> FakeIdentityDirectory:
    return FakeIdentityDirectory(admins={"admin"}, children={"u2": {"c1", "c2"}})


@pytest.fixture
def registration_service(event_store, identity, catalog) -> RegistrationService:
    return RegistrationService(event_store, identity, catalog)


@pytest.fixture
def event_service(event_store, catalog) -> EventService:
    return EventService(event_store, catalog)
