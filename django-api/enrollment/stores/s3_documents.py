"""S3 implementation of DocumentStorage."""

from typing import Any

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from enrollment.domain import StoredDocument
from enrollment.domain.errors import CollaboratorUnavailableError
from enrollment.stores.interfaces import DocumentStorage

logger = structlog.get_logger(__name__)

DOCUMENTS = "Document storage"


class S3DocumentStorage(DocumentStorage):
    """Bucket-backed document storage. The boto3 client is injected."""

    def __init__(self, client: Any, bucket: str, region: str) -> None:
        self._client = client
        self._bucket = bucket
        self._region = region

    def object_url(self, key: str) -> str:
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def _to_document(self, item: dict[str, Any]) -> StoredDocument:
        key = item.get("Key", "")
        return StoredDocument(
            key=key,
            name=key.rsplit("/", 1)[-1],
            url=self.object_url(key),
            size=int(item.get("Size", 0)),
            modified_at=item.get("LastModified"),
        )

    def list_objects(self, prefix: str) -> list[StoredDocument]:
        documents: list[StoredDocument] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
                documents.extend(self._to_document(item) for item in page.get("Contents", []))
        except (BotoCoreError, ClientError) as exc:
            logger.error("document_listing_failed", prefix=prefix, error=str(exc))
            raise CollaboratorUnavailableError(DOCUMENTS) from exc
        return documents

    def upload(self, key: str, content: bytes, content_type: str) -> StoredDocument:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("document_upload_failed", key=key, error=str(exc))
            raise CollaboratorUnavailableError(DOCUMENTS) from exc
        logger.info("document_uploaded", key=key, size=len(content))
        return StoredDocument(
            key=key,
            name=key.rsplit("/", 1)[-1],
            url=self.object_url(key),
            size=len(content),
            modified_at=None,
        )

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.error("document_delete_failed", key=key, error=str(exc))
            raise CollaboratorUnavailableError(DOCUMENTS) from exc
        logger.info("document_deleted", key=key)
