"""Waiver PDF library on top of the document storage collaborator."""

import math
from enum import Enum

from enrollment.domain import DocumentPage, StoredDocument
from enrollment.domain.errors import InvalidDocumentError, InvalidPaginationError
from enrollment.stores.interfaces import DocumentStorage

DEFAULT_PAGE_SIZE = 8


class DocumentKind(Enum):
    TEMPLATE = "template"
    COMPLETED = "completed"

    @property
    def prefix(self) -> str:
        folder = "templates" if self is DocumentKind.TEMPLATE else "completed"
        return f"waivers/{folder}/"


class DocumentLibrary:
    """Lists, uploads and deletes waiver PDFs.

    Pagination is computed here over the full filtered listing, never pushed
    down to the storage layer.
    """

    def __init__(self, storage: DocumentStorage) -> None:
        self._storage = storage

    def list(
        self, kind: DocumentKind = DocumentKind.TEMPLATE, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> DocumentPage:
        if page < 1 or limit < 1:
            raise InvalidPaginationError()
        pdfs = [
            doc
            for doc in self._storage.list_objects(kind.prefix)
            if doc.key.lower().endswith(".pdf")
        ]
        offset = (page - 1) * limit
        return DocumentPage(
            items=tuple(pdfs[offset : offset + limit]),
            page=page,
            limit=limit,
            total_items=len(pdfs),
            total_pages=math.ceil(len(pdfs) / limit),
        )

    def upload(
        self,
        filename: str,
        content: bytes,
        kind: DocumentKind = DocumentKind.TEMPLATE,
        content_type: str = "application/pdf",
    ) -> StoredDocument:
        name = filename.rsplit("/", 1)[-1].strip()
        if not name:
            raise InvalidDocumentError("filename is required")
        if not name.lower().endswith(".pdf"):
            raise InvalidDocumentError("Only PDF documents can be uploaded")
        return self._storage.upload(f"{kind.prefix}{name}", content, content_type)

    def delete(self, key: str) -> None:
        if not key.startswith("waivers/"):
            raise InvalidDocumentError("Only waiver documents can be deleted")
        self._storage.delete(key)
