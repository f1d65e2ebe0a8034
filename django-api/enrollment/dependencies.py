"""Explicit construction of services and their collaborators.

Handlers call these factories instead of reaching for module-level clients,
so tests can swap any collaborator with monkeypatch.
"""

from functools import lru_cache

import boto3
from django.conf import settings

from enrollment.services.catalog_service import WaiverCatalog
from enrollment.services.document_service import DocumentLibrary
from enrollment.services.event_service import EventService
from enrollment.services.registration_service import RegistrationService
from enrollment.stores.django_store import DjangoEventStore, DjangoWaiverTemplateStore
from enrollment.stores.identity import DjangoIdentityDirectory
from enrollment.stores.interfaces import IdentityDirectory
from enrollment.stores.s3_documents import S3DocumentStorage


@lru_cache(maxsize=1)
def get_s3_client():
    """Process-wide S3 client. An endpoint URL points it at MinIO in development."""
    return boto3.client(
        "s3",
        region_name=settings.AWS_S3_REGION_NAME,
        endpoint_url=settings.AWS_S3_ENDPOINT_URL or None,
    )


def get_identity_directory() -> IdentityDirectory:
    return DjangoIdentityDirectory()


def get_waiver_catalog() -> WaiverCatalog:
    return WaiverCatalog(DjangoWaiverTemplateStore())


def get_event_service() -> EventService:
    return EventService(
        DjangoEventStore(),
        get_waiver_catalog(),
        max_retries=settings.REGISTRATION_MAX_RETRIES,
    )


def get_registration_service() -> RegistrationService:
    return RegistrationService(
        DjangoEventStore(),
        get_identity_directory(),
        get_waiver_catalog(),
        max_retries=settings.REGISTRATION_MAX_RETRIES,
    )


def get_document_library() -> DocumentLibrary:
    storage = S3DocumentStorage(
        get_s3_client(),
        bucket=settings.AWS_STORAGE_BUCKET_NAME,
        region=settings.AWS_S3_REGION_NAME,
    )
    return DocumentLibrary(storage)
