"""Unit tests for the in-memory DocumentStore and IngestionService."""

from __future__ import annotations

import base64

import pytest

from docbench.models.document import DocumentFile, DocumentKind
from docbench.services.document_store import DocumentStore
from docbench.services.ingestion import (
    IngestionService,
    detect_kind,
    new_document_id,
    strip_data_url_prefix,
)
from docbench.utils.errors import NotFoundError, UnsupportedDocumentError


def _doc(doc_id: str, content: str = "") -> DocumentFile:
    return DocumentFile(id=doc_id, name=f"{doc_id}.txt", kind=DocumentKind.TEXT, content=content)


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def ingestion() -> IngestionService:
    return IngestionService()


class TestDocumentStore:
    def test_remove_keeps_order(self, store: DocumentStore) -> None:
        for doc_id in ("a", "b", "c", "d"):
            store.add_document(_doc(doc_id))

        removed = store.remove_document("b")

        assert removed.id == "b"
        assert [d.id for d in store.list_documents()] == ["a", "c", "d"]

    def test_remove_unknown_raises(self, store: DocumentStore) -> None:
        store.add_document(_doc("a"))
        with pytest.raises(NotFoundError):
            store.remove_document("zzz")
        assert len(store) == 1

    def test_update_replaces_in_place(self, store: DocumentStore) -> None:
        store.add_document(_doc("a"))
        store.add_document(_doc("b"))

        updated = store.update_document("a", {"content": "new text", "kind": "pdf"})

        assert updated.content == "new text"
        # Only name/content are editable.
        assert updated.kind is DocumentKind.TEXT
        assert [d.id for d in store.list_documents()] == ["a", "b"]
        assert store.get_document("a").content == "new text"

    def test_combined_text_joins_with_blank_line(self, store: DocumentStore) -> None:
        store.add_document(_doc("a", "first"))
        store.add_document(_doc("b", "second"))
        assert store.combined_text() == "first\n\nsecond"

    def test_list_is_a_copy(self, store: DocumentStore) -> None:
        store.add_document(_doc("a"))
        store.list_documents().clear()
        assert len(store) == 1


class TestDetectKind:
    @pytest.mark.parametrize(
        ("filename", "media_type", "expected"),
        [
            ("scan.jpg", "image/jpeg", DocumentKind.IMAGE),
            ("label.pdf", "application/pdf", DocumentKind.PDF),
            ("notes.md", "text/markdown", DocumentKind.TEXT),
            ("data.json", "application/json", DocumentKind.TEXT),
            ("notes.md", "application/octet-stream", DocumentKind.TEXT),
            ("table.csv", None, DocumentKind.TEXT),
            ("photo.PNG", "", DocumentKind.IMAGE),
        ],
    )
    def test_known_kinds(self, filename: str, media_type: str | None, expected: DocumentKind) -> None:
        assert detect_kind(filename, media_type) is expected

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(UnsupportedDocumentError):
            detect_kind("archive.zip", "application/zip")


class TestIngestion:
    def test_text_file_is_decoded(self, store: DocumentStore, ingestion: IngestionService) -> None:
        doc = ingestion.add_document(store, "a.txt", "text/plain", "héllo".encode())

        assert doc.kind is DocumentKind.TEXT
        assert doc.content == "héllo"
        assert doc.base64 is None
        assert store.list_documents() == [doc]

    def test_invalid_utf8_is_replaced(self, ingestion: IngestionService) -> None:
        doc = ingestion.build_document("a.txt", "text/plain", b"ok \xff\xfe end")
        assert doc.content.startswith("ok ")
        assert "�" in doc.content

    def test_image_is_base64_encoded(self, ingestion: IngestionService, png_bytes: bytes) -> None:
        doc = ingestion.build_document("scan.png", "image/png", png_bytes)

        assert doc.kind is DocumentKind.IMAGE
        assert doc.content == ""
        assert base64.b64decode(doc.base64) == png_bytes
        assert doc.mime_type == "image/png"
        assert doc.ocr_mime_type == "image/png"

    def test_pdf_mime_type(self, ingestion: IngestionService) -> None:
        doc = ingestion.build_document("label.pdf", "application/octet-stream", b"%PDF-1.7")
        assert doc.kind is DocumentKind.PDF
        assert doc.ocr_mime_type == "application/pdf"

    def test_ids_are_unique(self, store: DocumentStore, ingestion: IngestionService) -> None:
        first = ingestion.add_document(store, "a.txt", "text/plain", b"a")
        second = ingestion.add_document(store, "a.txt", "text/plain", b"a")
        assert first.id != second.id

    def test_unsupported_upload_leaves_store_untouched(
        self, store: DocumentStore, ingestion: IngestionService
    ) -> None:
        with pytest.raises(UnsupportedDocumentError):
            ingestion.add_document(store, "movie.mp4", "video/mp4", b"\x00")
        assert len(store) == 0

    def test_paste_twice_replaces(self, store: DocumentStore, ingestion: IngestionService) -> None:
        store.add_document(_doc("upload-1", "uploaded"))

        first = ingestion.paste_text(store, "first pasted paragraph")
        second = ingestion.paste_text(store, "second pasted paragraph")

        pasted = [d for d in store.list_documents() if d.id.startswith("paste-")]
        assert first is not None and second is not None
        assert len(pasted) == 1
        assert pasted[0].content == "second pasted paragraph"
        assert pasted[0].name == "Pasted Text"
        assert store.list_documents()[0].id == "upload-1"

    def test_short_paste_ignored(self, store: DocumentStore, ingestion: IngestionService) -> None:
        assert ingestion.paste_text(store, "0123456789") is None
        assert len(store) == 0


def test_strip_data_url_prefix() -> None:
    assert strip_data_url_prefix("data:image/png;base64,QUJD") == "QUJD"
    assert strip_data_url_prefix("QUJD") == "QUJD"


def test_new_document_id_shape() -> None:
    stamp, suffix = new_document_id().split("-")
    assert stamp.isdigit()
    assert len(suffix) == 8
