"""Pydantic request/response schemas for the docbench API.

Request schemas end with "Request", response schemas with "Response".
Model-call requests share :class:`ModelCallOptions`; leaving ``model`` or
``max_tokens`` out uses the catalog default for that operation.

Note payloads are serialised under the keys the model produces
(``formattedText``, ``mindGraph``, ...) so the browser can render either
a generated note or a raw-JSON edit the same way.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from docbench.models.analysis import WordCount
from docbench.models.catalog import ModelOption, TokenBudget
from docbench.models.document import DocumentSummary
from docbench.models.note import StructuredNote
from docbench.models.theme import Theme


class ModelCallOptions(BaseModel):
    """Optional model id and output budget for one model call."""

    model: str | None = None
    max_tokens: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Workspaces & documents
# ---------------------------------------------------------------------------


class WorkspaceResponse(BaseModel):
    workspace_id: str
    documents: list[DocumentSummary] = Field(default_factory=list)


class DocumentListResponse(BaseModel):
    documents: list[DocumentSummary]
    combined_chars: int = Field(description="Length of the joined document text")


class UploadResponse(BaseModel):
    """Documents created by one multipart upload, in upload order."""

    documents: list[DocumentSummary]


class DocumentPatchRequest(BaseModel):
    """Manual edit of a document; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    content: str | None = None


class PasteRequest(BaseModel):
    text: str


class PasteResponse(BaseModel):
    """Result of merging pasted text.

    ``ignored`` is true (and ``document`` empty) when the text was too short.
    """

    ignored: bool
    document: DocumentSummary | None = None


# ---------------------------------------------------------------------------
# Model operations
# ---------------------------------------------------------------------------


class OCRRequest(ModelCallOptions):
    pass


class OCRResponse(BaseModel):
    document: DocumentSummary
    text: str


class AnalysisRequest(ModelCallOptions):
    prompt: str | None = Field(default=None, description="Agent instruction; default prompt if omitted")


class AnalysisResponse(BaseModel):
    doc_id: str
    result: str


class AskQuestionRequest(ModelCallOptions):
    question: str = Field(..., max_length=4000)


class AskQuestionResponse(BaseModel):
    question: str
    answer: str


class NoteRequest(ModelCallOptions):
    text: str | None = Field(default=None, description="Text to analyse; combined documents if omitted")
    prompt: str | None = None


class RawNoteRequest(BaseModel):
    raw_json: str


class NoteResponse(BaseModel):
    note: StructuredNote
    raw_json: str
    questions: list[str] = Field(description="Follow-up questions, one per entry, numbering removed")


class WordFrequencyResponse(BaseModel):
    terms: list[WordCount]


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class ThemeResponse(BaseModel):
    index: int
    theme: Theme
    background: str
    text_color: str


class ThemeListResponse(BaseModel):
    themes: list[ThemeResponse]


class LocaleResponse(BaseModel):
    language: str
    strings: dict[str, str]
    available: list[str]


class ModelsResponse(BaseModel):
    provider: str
    models: list[ModelOption]
    budgets: dict[str, TokenBudget]


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ProvidersResponse(BaseModel):
    """Configured model providers and their availability."""

    providers: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
