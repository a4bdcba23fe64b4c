"""Integration tests for the FastAPI endpoints using TestClient.

The app is assembled from real services around a mocked ILLMProvider, so
every request exercises routing, the workbench services, the gateway and
the error middleware without any network traffic.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docbench.api.middleware import ErrorHandlingMiddleware
from docbench.api.routes import router as api_router
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.models.catalog import ModelCatalog
from docbench.services.document_processor import DocumentProcessor
from docbench.services.ingestion import IngestionService
from docbench.services.model_gateway import (
    ANALYSIS_INPUT_MISSING,
    OCR_FAILED,
    OCR_PAYLOAD_MISSING,
    QNA_QUESTION_MISSING,
    ModelGateway,
)
from docbench.services.smart_note_service import SmartNoteService
from docbench.services.workspace import WorkspaceRegistry
from docbench.utils.errors import LLMError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_app(llm: ILLMProvider, catalog: ModelCatalog) -> FastAPI:
    """FastAPI app with real services around the given provider."""
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.include_router(api_router)

    gateway = ModelGateway(llm_provider=llm, catalog=catalog)
    app.state.workspaces = WorkspaceRegistry()
    app.state.ingestion_service = IngestionService()
    app.state.model_gateway = gateway
    app.state.document_processor = DocumentProcessor(gateway)
    app.state.smart_note_service = SmartNoteService(gateway)
    app.state.model_catalog = catalog
    app.state.llm_provider = llm
    app.state.provider_registry = {"llm": True, "llm_provider": "mock-llm", "vision": True}
    app.state.provider_list = [
        {"name": "MockLLM", "type": "llm", "provider": "mock-llm", "available": True, "active": True}
    ]
    return app


@pytest.fixture
def client(mock_llm_provider: MagicMock, model_catalog: ModelCatalog) -> TestClient:
    return TestClient(_create_test_app(mock_llm_provider, model_catalog))


@pytest.fixture
def workspace_id(client: TestClient) -> str:
    resp = client.post("/api/v1/workspaces")
    assert resp.status_code == 201
    return resp.json()["workspace_id"]


def _upload(client: TestClient, workspace_id: str, *files: tuple[str, bytes, str]) -> Any:
    return client.post(
        f"/api/v1/workspaces/{workspace_id}/documents",
        files=[("files", f) for f in files],
    )


def _url(workspace_id: str, path: str = "") -> str:
    return f"/api/v1/workspaces/{workspace_id}{path}"


# ---------------------------------------------------------------------------
# Workspaces and documents
# ---------------------------------------------------------------------------


class TestWorkspaces:
    def test_create_and_delete(self, client: TestClient, workspace_id: str) -> None:
        assert client.get(_url(workspace_id, "/documents")).json()["documents"] == []

        assert client.delete(_url(workspace_id)).status_code == 204
        resp = client.get(_url(workspace_id, "/documents"))
        assert resp.status_code == 404
        assert resp.json()["error"] == "NotFoundError"

    def test_unknown_workspace(self, client: TestClient) -> None:
        assert client.delete(_url("nope")).status_code == 404


class TestDocuments:
    def test_upload_text_and_image(
        self, client: TestClient, workspace_id: str, png_bytes: bytes
    ) -> None:
        resp = _upload(
            client,
            workspace_id,
            ("notes.txt", b"Approval letter for Drug X", "text/plain"),
            ("scan.png", png_bytes, "image/png"),
        )

        assert resp.status_code == 201
        docs = resp.json()["documents"]
        assert [d["kind"] for d in docs] == ["text", "image"]
        assert docs[0]["content_chars"] == len("Approval letter for Drug X")
        assert docs[1]["has_payload"] is True

        listing = client.get(_url(workspace_id, "/documents")).json()
        assert [d["name"] for d in listing["documents"]] == ["notes.txt", "scan.png"]
        # Image content is empty until OCR, so only the text contributes.
        assert listing["combined_chars"] == len("Approval letter for Drug X")

    def test_unsupported_upload(self, client: TestClient, workspace_id: str) -> None:
        resp = _upload(client, workspace_id, ("archive.zip", b"PK\x03\x04", "application/zip"))

        assert resp.status_code == 415
        assert resp.json()["error"] == "UnsupportedDocumentError"

    def test_get_patch_delete(self, client: TestClient, workspace_id: str) -> None:
        doc_id = _upload(client, workspace_id, ("a.md", b"# Title", "text/markdown")).json()[
            "documents"
        ][0]["id"]

        assert client.get(_url(workspace_id, f"/documents/{doc_id}")).json()["content"] == "# Title"

        patched = client.patch(
            _url(workspace_id, f"/documents/{doc_id}"),
            json={"name": "renamed.md", "content": "edited body"},
        )
        assert patched.status_code == 200
        assert patched.json()["name"] == "renamed.md"
        assert client.get(_url(workspace_id, f"/documents/{doc_id}")).json()["content"] == "edited body"

        assert client.delete(_url(workspace_id, f"/documents/{doc_id}")).status_code == 204
        assert client.get(_url(workspace_id, f"/documents/{doc_id}")).status_code == 404

    def test_paste_replaces_previous(self, client: TestClient, workspace_id: str) -> None:
        first = client.put(_url(workspace_id, "/paste"), json={"text": "First pasted block of text"})
        second = client.put(_url(workspace_id, "/paste"), json={"text": "Second pasted block of text"})

        assert first.json()["ignored"] is False
        assert second.json()["document"]["name"] == "Pasted Text"
        docs = client.get(_url(workspace_id, "/documents")).json()["documents"]
        assert len(docs) == 1
        assert docs[0]["content_chars"] == len("Second pasted block of text")

    def test_short_paste_ignored(self, client: TestClient, workspace_id: str) -> None:
        resp = client.put(_url(workspace_id, "/paste"), json={"text": "too short"})

        assert resp.status_code == 200
        assert resp.json() == {"ignored": True, "document": None}
        assert client.get(_url(workspace_id, "/documents")).json()["documents"] == []


# ---------------------------------------------------------------------------
# Model operations
# ---------------------------------------------------------------------------


class TestOCR:
    def test_ocr_stores_text(
        self,
        client: TestClient,
        workspace_id: str,
        png_bytes: bytes,
        mock_llm_provider: MagicMock,
    ) -> None:
        doc_id = _upload(client, workspace_id, ("scan.png", png_bytes, "image/png")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(_url(workspace_id, f"/documents/{doc_id}/ocr"))

        assert resp.status_code == 200
        assert resp.json()["text"] == "TRANSCRIBED TEXT"
        kwargs = mock_llm_provider.extract_from_document.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["max_tokens"] == 12000
        stored = client.get(_url(workspace_id, f"/documents/{doc_id}")).json()
        assert stored["content"] == "TRANSCRIBED TEXT"

    def test_ocr_on_text_document(self, client: TestClient, workspace_id: str) -> None:
        doc_id = _upload(client, workspace_id, ("a.txt", b"plain words", "text/plain")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(_url(workspace_id, f"/documents/{doc_id}/ocr"))

        assert resp.status_code == 400
        assert resp.json()["detail"] == OCR_PAYLOAD_MISSING

    def test_ocr_provider_failure(
        self,
        client: TestClient,
        workspace_id: str,
        png_bytes: bytes,
        mock_llm_provider: MagicMock,
    ) -> None:
        mock_llm_provider.extract_from_document = AsyncMock(
            side_effect=LLMError("quota exceeded", provider_name="mock-llm")
        )
        doc_id = _upload(client, workspace_id, ("scan.png", png_bytes, "image/png")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(_url(workspace_id, f"/documents/{doc_id}/ocr"))

        assert resp.status_code == 502
        assert resp.json() == {"error": "ModelGatewayError", "detail": OCR_FAILED}
        # The document keeps its empty content.
        assert client.get(_url(workspace_id, f"/documents/{doc_id}")).json()["content"] == ""

    def test_out_of_range_budget(
        self, client: TestClient, workspace_id: str, png_bytes: bytes
    ) -> None:
        doc_id = _upload(client, workspace_id, ("scan.png", png_bytes, "image/png")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(
            _url(workspace_id, f"/documents/{doc_id}/ocr"), json={"max_tokens": 64000}
        )

        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidInputError"


class TestAnalysisAndQuestions:
    def test_analysis(
        self, client: TestClient, workspace_id: str, mock_llm_provider: MagicMock
    ) -> None:
        mock_llm_provider.complete.return_value = "Risk: low"
        doc_id = _upload(client, workspace_id, ("a.txt", b"Some findings", "text/plain")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(
            _url(workspace_id, f"/documents/{doc_id}/analysis"),
            json={"prompt": "List the risks."},
        )

        assert resp.json() == {"doc_id": doc_id, "result": "Risk: low"}
        parts = mock_llm_provider.complete.call_args.args[0]
        assert parts[1].endswith("List the risks.")

    def test_analysis_without_text(
        self, client: TestClient, workspace_id: str, png_bytes: bytes
    ) -> None:
        doc_id = _upload(client, workspace_id, ("scan.png", png_bytes, "image/png")).json()[
            "documents"
        ][0]["id"]

        resp = client.post(_url(workspace_id, f"/documents/{doc_id}/analysis"))

        assert resp.status_code == 400
        assert resp.json()["detail"] == ANALYSIS_INPUT_MISSING

    def test_ask(self, client: TestClient, workspace_id: str, mock_llm_provider: MagicMock) -> None:
        _upload(client, workspace_id, ("a.txt", b"Drug X was approved in 2021.", "text/plain"))

        resp = client.post(_url(workspace_id, "/ask"), json={"question": "When?"})

        assert resp.status_code == 200
        assert resp.json() == {"question": "When?", "answer": "mock answer"}
        assert mock_llm_provider.complete.call_args.kwargs["max_tokens"] == 1024

    def test_ask_blank_question(self, client: TestClient, workspace_id: str) -> None:
        _upload(client, workspace_id, ("a.txt", b"Drug X was approved.", "text/plain"))

        resp = client.post(_url(workspace_id, "/ask"), json={"question": "   "})

        assert resp.status_code == 400
        assert resp.json()["detail"] == QNA_QUESTION_MISSING

    def test_ask_passes_provider_message(
        self, client: TestClient, workspace_id: str, mock_llm_provider: MagicMock
    ) -> None:
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("Rate limit reached"))
        _upload(client, workspace_id, ("a.txt", b"Drug X was approved.", "text/plain"))

        resp = client.post(_url(workspace_id, "/ask"), json={"question": "When?"})

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Rate limit reached"

    def test_word_frequency(self, client: TestClient, workspace_id: str) -> None:
        _upload(
            client,
            workspace_id,
            ("a.txt", b"Clinical trial data. Clinical review of trial results.", "text/plain"),
        )

        resp = client.get(_url(workspace_id, "/word-frequency"), params={"limit": 2})

        assert resp.json()["terms"] == [
            {"name": "clinical", "value": 2},
            {"name": "trial", "value": 2},
        ]


# ---------------------------------------------------------------------------
# Structured notes
# ---------------------------------------------------------------------------


class TestNotes:
    @pytest.fixture
    def note_client(
        self, client: TestClient, mock_llm_provider: MagicMock, sample_note_json: str
    ) -> TestClient:
        mock_llm_provider.complete.return_value = f"```json\n{sample_note_json}\n```"
        return client

    def test_generate_and_read(
        self, note_client: TestClient, workspace_id: str, mock_llm_provider: MagicMock
    ) -> None:
        resp = note_client.post(_url(workspace_id, "/notes"), json={"text": "Drug X approved"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["note"]["formattedText"].startswith("# Summary")
        assert body["note"]["original_text"] == "Drug X approved"
        assert body["questions"] == ["When was Drug X approved?", "Which trial supported it?"]
        assert json.loads(body["raw_json"])["keywords"] == ["FDA", "Drug X", "approval"]
        assert mock_llm_provider.complete.call_args.kwargs["json_output"] is True

        assert note_client.get(_url(workspace_id, "/notes")).json()["note"]["id"] == body["note"]["id"]

    def test_note_before_generation(self, client: TestClient, workspace_id: str) -> None:
        assert client.get(_url(workspace_id, "/notes")).status_code == 404
        assert client.get(_url(workspace_id, "/notes/graph")).status_code == 404

    def test_generate_without_text(self, client: TestClient, workspace_id: str) -> None:
        resp = client.post(_url(workspace_id, "/notes"))
        assert resp.status_code == 400

    def test_invalid_model_reply(
        self, client: TestClient, workspace_id: str, mock_llm_provider: MagicMock
    ) -> None:
        mock_llm_provider.complete.return_value = "Sorry, I cannot help."

        resp = client.post(_url(workspace_id, "/notes"), json={"text": "Drug X approved"})

        assert resp.status_code == 502
        assert resp.json()["error"] == "InvalidResponseFormatError"

    def test_raw_edit(self, note_client: TestClient, workspace_id: str, sample_note_payload) -> None:
        created = note_client.post(_url(workspace_id, "/notes"), json={"text": "Drug X approved"}).json()
        sample_note_payload["keywords"] = ["edited"]

        resp = note_client.put(
            _url(workspace_id, "/notes/raw"), json={"raw_json": json.dumps(sample_note_payload)}
        )

        assert resp.status_code == 200
        note = resp.json()["note"]
        assert note["keywords"] == ["edited"]
        assert note["id"] == created["note"]["id"]
        assert note["original_text"] == "Drug X approved"

    def test_raw_edit_invalid_json(self, note_client: TestClient, workspace_id: str) -> None:
        note_client.post(_url(workspace_id, "/notes"), json={"text": "Drug X approved"})

        resp = note_client.put(_url(workspace_id, "/notes/raw"), json={"raw_json": "{not json"})

        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidNoteFormatError"
        # Previous note is untouched.
        assert note_client.get(_url(workspace_id, "/notes")).json()["note"]["keywords"] == [
            "FDA",
            "Drug X",
            "approval",
        ]

    def test_graph_layout(self, note_client: TestClient, workspace_id: str) -> None:
        note_client.post(_url(workspace_id, "/notes"), json={"text": "Drug X approved"})

        layout = note_client.get(_url(workspace_id, "/notes/graph")).json()

        assert (layout["width"], layout["height"]) == (600, 400)
        assert [n["id"] for n in layout["nodes"]] == ["FDA", "DrugX", "Trial"]
        assert len(layout["links"]) == 2


# ---------------------------------------------------------------------------
# Reference data and system
# ---------------------------------------------------------------------------


class TestReferenceData:
    def test_themes(self, client: TestClient) -> None:
        themes = client.get("/api/v1/themes", params={"dark": True}).json()["themes"]
        assert len(themes) == 20
        assert themes[0]["text_color"] == themes[0]["theme"]["text_dark"]

    def test_theme_index(self, client: TestClient) -> None:
        assert client.get("/api/v1/themes/3").json()["index"] == 3
        assert client.get("/api/v1/themes/20").status_code == 404

    def test_random_theme(self, client: TestClient) -> None:
        assert 0 <= client.get("/api/v1/themes/random").json()["index"] < 20

    def test_locale(self, client: TestClient) -> None:
        body = client.get("/api/v1/locales/zh-TW").json()
        assert body["language"] == "zh-TW"
        assert "en" in body["available"]
        assert client.get("/api/v1/locales/fr").status_code == 404

    def test_models(self, client: TestClient) -> None:
        body = client.get("/api/v1/models").json()
        assert body["provider"] == "gemini"
        assert body["budgets"]["qna"]["max"] == 8192
        assert {m["id"] for m in body["models"]} >= {"gemini-2.5-flash", "gemini-3-pro-preview"}


class TestSystem:
    def test_health(self, client: TestClient) -> None:
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["providers"]["llm_provider"] == "mock-llm"

    def test_health_degraded(self, client: TestClient) -> None:
        client.app.state.provider_registry = {"llm": False}
        assert client.get("/api/v1/health").json()["status"] == "degraded"

    def test_health_verify_checks_credentials(
        self, client: TestClient, mock_llm_provider: MagicMock
    ) -> None:
        body = client.get("/api/v1/health", params={"verify": True}).json()

        assert body["status"] == "healthy"
        assert body["providers"]["credentials_valid"] is True
        mock_llm_provider.validate_credentials.assert_awaited_once()

    def test_health_verify_rejected_key(
        self, client: TestClient, mock_llm_provider: MagicMock
    ) -> None:
        mock_llm_provider.validate_credentials.return_value = False

        body = client.get("/api/v1/health", params={"verify": True}).json()

        assert body["status"] == "degraded"
        assert body["providers"]["credentials_valid"] is False

    def test_health_without_verify_makes_no_call(
        self, client: TestClient, mock_llm_provider: MagicMock
    ) -> None:
        client.get("/api/v1/health")
        mock_llm_provider.validate_credentials.assert_not_called()

    def test_providers(self, client: TestClient) -> None:
        assert client.get("/api/v1/providers").json()["providers"][0]["active"] is True
