"""Document models for the workbench's in-memory store.

A ``DocumentFile`` is created by ingestion (upload or paste), replaced when
OCR or a manual edit supplies its text, and dropped on explicit removal.
Text documents carry their decoded ``content`` from the start; image and PDF
documents carry the original bytes as ``base64`` and an empty ``content``
until OCR fills it in.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentKind(str, Enum):
    """How a document's payload is held."""

    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"

    @property
    def is_binary(self) -> bool:
        return self is not DocumentKind.TEXT


def _utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()  # noqa: UP017


class DocumentFile(BaseModel):
    """One uploaded or pasted document.

    Frozen: every change goes through ``model_copy(update=...)`` and
    :meth:`DocumentStore.update_document`, which swaps the stored record.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: DocumentKind
    # Decoded text. Empty for image/pdf until OCR or a manual edit.
    content: str = ""
    # Original bytes, base64-encoded without any data-URL prefix. Image/pdf only.
    base64: str | None = None
    # Declared media type of the upload, e.g. "image/jpeg".
    mime_type: str | None = None
    timestamp: str = Field(default_factory=_utc_now_iso)

    @property
    def ocr_mime_type(self) -> str:
        """Media type to send with the inline OCR payload."""
        if self.kind is DocumentKind.PDF:
            return "application/pdf"
        if self.mime_type and self.mime_type.startswith("image/"):
            return self.mime_type
        return "image/png"

    @property
    def has_text(self) -> bool:
        return bool(self.content.strip())


class DocumentSummary(BaseModel):
    """Listing view of a document without the (possibly large) payload."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: DocumentKind
    mime_type: str | None = None
    timestamp: str
    content_chars: int
    has_payload: bool

    @classmethod
    def from_document(cls, doc: DocumentFile) -> DocumentSummary:
        return cls(
            id=doc.id,
            name=doc.name,
            kind=doc.kind,
            mime_type=doc.mime_type,
            timestamp=doc.timestamp,
            content_chars=len(doc.content),
            has_payload=doc.base64 is not None,
        )
