"""Turns uploads and pasted text into :class:`DocumentFile` records.

Text kinds are decoded as UTF-8 (undecodable bytes replaced); images and
PDFs are kept as base64 so they can be sent inline for OCR.  Kind detection
looks at the declared media type first and falls back to the file
extension, since browsers often send ``application/octet-stream`` for
Markdown or CSV files.
"""

from __future__ import annotations

import base64
import time
from pathlib import PurePosixPath
from uuid import uuid4

from docbench.models.document import DocumentFile, DocumentKind
from docbench.services.document_store import PASTE_ID_PREFIX, DocumentStore
from docbench.utils.errors import UnsupportedDocumentError
from docbench.utils.logging import get_logger

PASTED_DOCUMENT_NAME = "Pasted Text"

# Pasted text of this length or shorter is ignored.
MIN_PASTE_LENGTH = 10

_TEXT_EXTENSIONS = frozenset({".txt", ".md", ".markdown", ".csv", ".json"})
_IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"})

_EXTENSION_MEDIA_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".pdf": "application/pdf",
}


def strip_data_url_prefix(value: str) -> str:
    """Return the payload of a ``data:<mime>;base64,<payload>`` URL.

    Values without the prefix are returned unchanged.
    """
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def new_document_id() -> str:
    """Millisecond timestamp plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid4().hex[:8]}"


def detect_kind(filename: str, media_type: str | None) -> DocumentKind:
    """Classify an upload as text, image or PDF.

    Raises
    ------
    UnsupportedDocumentError
        If neither the media type nor the extension is recognised.
    """
    media_type = (media_type or "").split(";")[0].strip().lower()
    if media_type.startswith("image/"):
        return DocumentKind.IMAGE
    if media_type == "application/pdf":
        return DocumentKind.PDF
    if media_type.startswith("text/") or media_type == "application/json":
        return DocumentKind.TEXT

    suffix = PurePosixPath(filename).suffix.lower()
    if suffix in _TEXT_EXTENSIONS:
        return DocumentKind.TEXT
    if suffix in _IMAGE_EXTENSIONS:
        return DocumentKind.IMAGE
    if suffix == ".pdf":
        return DocumentKind.PDF
    raise UnsupportedDocumentError(
        f"Unsupported file type for '{filename}' ({media_type or 'unknown media type'})"
    )


class IngestionService:
    """Builds documents from uploads/pastes and appends them to a store."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    def build_document(
        self,
        filename: str,
        media_type: str | None,
        data: bytes,
    ) -> DocumentFile:
        """Create a :class:`DocumentFile` from raw upload bytes.

        Parameters
        ----------
        filename:
            Client-side file name, used as the display name.
        media_type:
            Declared media type; may be empty or generic.
        data:
            Raw file bytes.

        Returns
        -------
        DocumentFile
            ``content`` populated for text kinds, ``base64`` for image/pdf.
        """
        kind = detect_kind(filename, media_type)
        if kind is DocumentKind.TEXT:
            return DocumentFile(
                id=new_document_id(),
                name=filename,
                kind=kind,
                content=data.decode("utf-8", errors="replace"),
            )

        declared = (media_type or "").split(";")[0].strip().lower()
        if kind is DocumentKind.PDF:
            mime_type = "application/pdf"
        elif declared.startswith("image/"):
            mime_type = declared
        else:
            mime_type = _EXTENSION_MEDIA_TYPES.get(PurePosixPath(filename).suffix.lower())
        return DocumentFile(
            id=new_document_id(),
            name=filename,
            kind=kind,
            base64=base64.b64encode(data).decode("ascii"),
            mime_type=mime_type,
        )

    def add_document(
        self,
        store: DocumentStore,
        filename: str,
        media_type: str | None,
        data: bytes,
    ) -> DocumentFile:
        """Build a document from an upload and append it to *store*."""
        document = store.add_document(self.build_document(filename, media_type, data))
        self._logger.info(
            "document_ingested",
            doc_id=document.id,
            kind=document.kind.value,
            bytes=len(data),
        )
        return document

    def paste_text(self, store: DocumentStore, text: str) -> DocumentFile | None:
        """Replace the pasted pseudo-document with *text*.

        Returns ``None`` without touching the store when *text* is
        :data:`MIN_PASTE_LENGTH` characters or shorter.
        """
        if len(text) <= MIN_PASTE_LENGTH:
            self._logger.debug("paste_ignored", chars=len(text))
            return None
        document = DocumentFile(
            id=f"{PASTE_ID_PREFIX}{int(time.time() * 1000)}",
            name=PASTED_DOCUMENT_NAME,
            kind=DocumentKind.TEXT,
            content=text,
        )
        store.replace_paste(document)
        self._logger.info("paste_merged", doc_id=document.id, chars=len(text))
        return document
