"""FastAPI routes for the document workbench.

Service dependencies are resolved from ``app.state`` (populated at startup
by ``docbench.main._build_all``) through ``Annotated[..., Depends(...)]``.
Application errors propagate as ``WorkbenchError`` subclasses and are
turned into JSON by :class:`docbench.api.middleware.ErrorHandlingMiddleware`.

Endpoint                                         Method   Description
-----------------------------------------------------------------------------
/api/v1/workspaces                               POST     Create a workspace
/api/v1/workspaces/{wid}                         DELETE   Discard a workspace
/api/v1/workspaces/{wid}/documents               GET      List documents
/api/v1/workspaces/{wid}/documents               POST     Upload files
/api/v1/workspaces/{wid}/documents/{doc_id}      GET      One document + payload
/api/v1/workspaces/{wid}/documents/{doc_id}      PATCH    Edit name / content
/api/v1/workspaces/{wid}/documents/{doc_id}      DELETE   Remove a document
/api/v1/workspaces/{wid}/paste                   PUT      Merge pasted text
/api/v1/workspaces/{wid}/documents/{doc_id}/ocr  POST     OCR into content
/api/v1/workspaces/{wid}/documents/{doc_id}/analysis POST Agent analysis
/api/v1/workspaces/{wid}/ask                     POST     Q&A over all documents
/api/v1/workspaces/{wid}/word-frequency          GET      Top terms
/api/v1/workspaces/{wid}/notes                   POST/GET Generate / read note
/api/v1/workspaces/{wid}/notes/raw               PUT      Raw-JSON note edit
/api/v1/workspaces/{wid}/notes/graph             GET      Mind graph layout
/api/v1/themes, /themes/random, /themes/{index}  GET      Palettes
/api/v1/locales/{lang}                           GET      Display strings
/api/v1/models                                   GET      Model catalog
/api/v1/health?verify=, /api/v1/providers        GET      System status
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response, UploadFile

from docbench import __version__
from docbench.api.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AskQuestionRequest,
    AskQuestionResponse,
    DocumentListResponse,
    DocumentPatchRequest,
    ErrorResponse,
    HealthResponse,
    LocaleResponse,
    ModelsResponse,
    NoteRequest,
    NoteResponse,
    OCRRequest,
    OCRResponse,
    PasteRequest,
    PasteResponse,
    ProvidersResponse,
    RawNoteRequest,
    ThemeListResponse,
    ThemeResponse,
    UploadResponse,
    WordFrequencyResponse,
    WorkspaceResponse,
)
from docbench.config.locales import get_locale, supported_languages
from docbench.config.themes import FLOWER_THEMES, get_theme, random_theme_index
from docbench.models.analysis import GraphLayout
from docbench.models.catalog import ModelCatalog
from docbench.models.document import DocumentFile, DocumentSummary
from docbench.services.document_processor import DocumentProcessor
from docbench.services.ingestion import IngestionService
from docbench.services.mind_graph import layout_graph
from docbench.services.model_gateway import ModelGateway
from docbench.services.smart_note_service import SmartNoteService
from docbench.services.word_frequency import top_terms
from docbench.services.workspace import Workspace, WorkspaceRegistry
from docbench.utils.errors import NotFoundError
from docbench.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_NOT_FOUND = {404: {"model": ErrorResponse}}
_MODEL_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


def _get_ingestion(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def _get_gateway(request: Request) -> ModelGateway:
    return request.app.state.model_gateway


def _get_processor(request: Request) -> DocumentProcessor:
    return request.app.state.document_processor


def _get_note_service(request: Request) -> SmartNoteService:
    return request.app.state.smart_note_service


def _get_catalog(request: Request) -> ModelCatalog:
    return request.app.state.model_catalog


RegistryDep = Annotated[WorkspaceRegistry, Depends(_get_registry)]


def _get_workspace(workspace_id: str, registry: RegistryDep) -> Workspace:
    """Resolve the ``{workspace_id}`` path parameter, 404 if unknown."""
    return registry.get(workspace_id)


WorkspaceDep = Annotated[Workspace, Depends(_get_workspace)]
IngestionDep = Annotated[IngestionService, Depends(_get_ingestion)]
GatewayDep = Annotated[ModelGateway, Depends(_get_gateway)]
ProcessorDep = Annotated[DocumentProcessor, Depends(_get_processor)]
NoteServiceDep = Annotated[SmartNoteService, Depends(_get_note_service)]
CatalogDep = Annotated[ModelCatalog, Depends(_get_catalog)]


def _summaries(documents: list[DocumentFile]) -> list[DocumentSummary]:
    return [DocumentSummary.from_document(d) for d in documents]


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@router.post(
    "/workspaces",
    response_model=WorkspaceResponse,
    status_code=201,
    summary="Create an empty workspace",
)
async def create_workspace(registry: RegistryDep) -> WorkspaceResponse:
    workspace = registry.create()
    return WorkspaceResponse(workspace_id=workspace.id)


@router.delete(
    "/workspaces/{workspace_id}",
    status_code=204,
    responses=_NOT_FOUND,
    summary="Discard a workspace and everything in it",
)
async def delete_workspace(workspace_id: str, registry: RegistryDep) -> Response:
    registry.discard(workspace_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@router.get(
    "/workspaces/{workspace_id}/documents",
    response_model=DocumentListResponse,
    responses=_NOT_FOUND,
    summary="List the workspace's documents in upload order",
)
async def list_documents(workspace: WorkspaceDep) -> DocumentListResponse:
    return DocumentListResponse(
        documents=_summaries(workspace.store.list_documents()),
        combined_chars=len(workspace.store.combined_text()),
    )


@router.post(
    "/workspaces/{workspace_id}/documents",
    response_model=UploadResponse,
    status_code=201,
    responses={**_NOT_FOUND, 415: {"model": ErrorResponse}},
    summary="Upload one or more text, image or PDF files",
)
async def upload_documents(
    files: list[UploadFile],
    workspace: WorkspaceDep,
    ingestion: IngestionDep,
) -> UploadResponse:
    """Ingest each file in order; an unsupported file stops the batch with 415.

    Files ingested before the unsupported one stay in the store.
    """
    created = []
    for upload in files:
        data = await upload.read()
        created.append(
            ingestion.add_document(
                workspace.store,
                upload.filename or "untitled",
                upload.content_type,
                data,
            )
        )
    return UploadResponse(documents=_summaries(created))


@router.get(
    "/workspaces/{workspace_id}/documents/{doc_id}",
    response_model=DocumentFile,
    responses=_NOT_FOUND,
    summary="Fetch one document including its content and payload",
)
async def get_document(doc_id: str, workspace: WorkspaceDep) -> DocumentFile:
    return workspace.store.get_document(doc_id)


@router.patch(
    "/workspaces/{workspace_id}/documents/{doc_id}",
    response_model=DocumentSummary,
    responses=_NOT_FOUND,
    summary="Edit a document's name or text content",
)
async def patch_document(
    doc_id: str,
    body: DocumentPatchRequest,
    workspace: WorkspaceDep,
) -> DocumentSummary:
    updated = workspace.store.update_document(doc_id, body.model_dump(exclude_none=True))
    return DocumentSummary.from_document(updated)


@router.delete(
    "/workspaces/{workspace_id}/documents/{doc_id}",
    status_code=204,
    responses=_NOT_FOUND,
    summary="Remove a document",
)
async def delete_document(doc_id: str, workspace: WorkspaceDep) -> Response:
    removed = workspace.store.remove_document(doc_id)
    _logger.info("document_removed", workspace_id=workspace.id, doc_id=removed.id)
    return Response(status_code=204)


@router.put(
    "/workspaces/{workspace_id}/paste",
    response_model=PasteResponse,
    responses=_NOT_FOUND,
    summary="Replace the pasted-text document",
)
async def paste_text(
    body: PasteRequest,
    workspace: WorkspaceDep,
    ingestion: IngestionDep,
) -> PasteResponse:
    document = ingestion.paste_text(workspace.store, body.text)
    if document is None:
        return PasteResponse(ignored=True)
    return PasteResponse(ignored=False, document=DocumentSummary.from_document(document))


# ---------------------------------------------------------------------------
# Model operations
# ---------------------------------------------------------------------------


@router.post(
    "/workspaces/{workspace_id}/documents/{doc_id}/ocr",
    response_model=OCRResponse,
    responses=_MODEL_ERRORS,
    summary="Transcribe an image/PDF document and store the text",
)
async def run_ocr(
    doc_id: str,
    workspace: WorkspaceDep,
    processor: ProcessorDep,
    body: OCRRequest | None = None,
) -> OCRResponse:
    options = body or OCRRequest()
    updated = await processor.run_ocr(
        workspace.store, doc_id, model=options.model, max_tokens=options.max_tokens
    )
    return OCRResponse(document=DocumentSummary.from_document(updated), text=updated.content)


@router.post(
    "/workspaces/{workspace_id}/documents/{doc_id}/analysis",
    response_model=AnalysisResponse,
    responses=_MODEL_ERRORS,
    summary="Run an agent instruction over one document's text",
)
async def analyze_document(
    doc_id: str,
    workspace: WorkspaceDep,
    processor: ProcessorDep,
    body: AnalysisRequest | None = None,
) -> AnalysisResponse:
    options = body or AnalysisRequest()
    result = await processor.analyze(
        workspace.store,
        doc_id,
        instruction_prompt=options.prompt,
        model=options.model,
        max_tokens=options.max_tokens,
    )
    return AnalysisResponse(doc_id=doc_id, result=result)


@router.post(
    "/workspaces/{workspace_id}/ask",
    response_model=AskQuestionResponse,
    responses=_MODEL_ERRORS,
    summary="Ask a question about all documents in the workspace",
)
async def ask_question(
    body: AskQuestionRequest,
    workspace: WorkspaceDep,
    gateway: GatewayDep,
) -> AskQuestionResponse:
    answer = await gateway.ask_question(
        workspace.store.combined_text(),
        body.question,
        model=body.model,
        max_tokens=body.max_tokens,
    )
    return AskQuestionResponse(question=body.question, answer=answer)


@router.get(
    "/workspaces/{workspace_id}/word-frequency",
    response_model=WordFrequencyResponse,
    responses=_NOT_FOUND,
    summary="Most frequent terms across all documents",
)
async def word_frequency(
    workspace: WorkspaceDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> WordFrequencyResponse:
    return WordFrequencyResponse(terms=top_terms(workspace.store.combined_text(), limit))


# ---------------------------------------------------------------------------
# Structured notes
# ---------------------------------------------------------------------------


def _note_response(workspace: Workspace) -> NoteResponse:
    if workspace.note is None:
        raise NotFoundError("No structured note yet. Generate one first.")
    return NoteResponse(
        note=workspace.note,
        raw_json=workspace.raw_json,
        questions=workspace.note.question_list(),
    )


@router.post(
    "/workspaces/{workspace_id}/notes",
    response_model=NoteResponse,
    responses=_MODEL_ERRORS,
    summary="Generate a structured note from text or the workspace documents",
)
async def generate_note(
    workspace: WorkspaceDep,
    note_service: NoteServiceDep,
    body: NoteRequest | None = None,
) -> NoteResponse:
    options = body or NoteRequest()
    await note_service.generate(
        workspace,
        text=options.text,
        instruction_prompt=options.prompt,
        model=options.model,
        max_tokens=options.max_tokens,
    )
    return _note_response(workspace)


@router.get(
    "/workspaces/{workspace_id}/notes",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Read the current structured note",
)
async def get_note(workspace: WorkspaceDep) -> NoteResponse:
    return _note_response(workspace)


@router.put(
    "/workspaces/{workspace_id}/notes/raw",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, 422: {"model": ErrorResponse}},
    summary="Replace the note from edited raw JSON",
)
async def update_note_raw(
    body: RawNoteRequest,
    workspace: WorkspaceDep,
    note_service: NoteServiceDep,
) -> NoteResponse:
    note_service.revise(workspace, body.raw_json)
    return _note_response(workspace)


@router.get(
    "/workspaces/{workspace_id}/notes/graph",
    response_model=GraphLayout,
    responses=_NOT_FOUND,
    summary="Circular layout of the note's mind graph",
)
async def note_graph(workspace: WorkspaceDep) -> GraphLayout:
    if workspace.note is None:
        raise NotFoundError("No structured note yet. Generate one first.")
    return layout_graph(workspace.note.mind_graph)


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


def _theme_response(index: int, dark: bool) -> ThemeResponse:
    theme = get_theme(index)
    return ThemeResponse(
        index=index,
        theme=theme,
        background=theme.background(dark),
        text_color=theme.text_color(dark),
    )


@router.get("/themes", response_model=ThemeListResponse, summary="List all palettes")
async def list_themes(dark: bool = False) -> ThemeListResponse:
    return ThemeListResponse(
        themes=[_theme_response(i, dark) for i in range(len(FLOWER_THEMES))]
    )


@router.get("/themes/random", response_model=ThemeResponse, summary="Spin the theme wheel")
async def random_theme(dark: bool = False) -> ThemeResponse:
    return _theme_response(random_theme_index(), dark)


@router.get(
    "/themes/{index}",
    response_model=ThemeResponse,
    responses=_NOT_FOUND,
    summary="Palette by catalog index",
)
async def theme_by_index(index: int, dark: bool = False) -> ThemeResponse:
    return _theme_response(index, dark)


@router.get(
    "/locales/{language}",
    response_model=LocaleResponse,
    responses=_NOT_FOUND,
    summary="Display strings for a language",
)
async def locale(language: str) -> LocaleResponse:
    return LocaleResponse(
        language=language,
        strings=dict(get_locale(language)),
        available=supported_languages(),
    )


@router.get("/models", response_model=ModelsResponse, summary="Selectable models and token budgets")
async def list_models(catalog: CatalogDep) -> ModelsResponse:
    return ModelsResponse(
        provider=catalog.provider,
        models=catalog.models,
        budgets={op.value: budget for op, budget in catalog.budgets.items()},
    )


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request, verify: bool = False) -> HealthResponse:
    """Healthy when the active model provider has credentials configured.

    With ``verify=true`` the provider also confirms the key with a
    model-listing call (no inference); a rejected key reads as degraded.
    """
    providers = dict(getattr(request.app.state, "provider_registry", {}))
    healthy = bool(providers.get("llm", False))
    if verify and healthy:
        valid = await request.app.state.llm_provider.validate_credentials()
        providers["credentials_valid"] = valid
        healthy = valid
    status = "healthy" if healthy else "degraded"
    return HealthResponse(status=status, version=__version__, providers=providers)


@router.get("/providers", response_model=ProvidersResponse, summary="List model providers")
async def list_providers(request: Request) -> ProvidersResponse:
    return ProvidersResponse(providers=getattr(request.app.state, "provider_list", []))
