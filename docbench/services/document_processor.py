"""Per-document model operations: OCR into the store, agent analysis."""

from __future__ import annotations

from docbench.models.document import DocumentFile
from docbench.services.document_store import DocumentStore
from docbench.services.model_gateway import OCR_PAYLOAD_MISSING, ModelGateway
from docbench.utils.errors import MissingInputError
from docbench.utils.logging import get_logger


class DocumentProcessor:
    """Binds store entries to the OCR and analysis gateway calls."""

    def __init__(self, gateway: ModelGateway) -> None:
        self._gateway = gateway
        self._logger = get_logger(__name__)

    async def run_ocr(
        self,
        store: DocumentStore,
        doc_id: str,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> DocumentFile:
        """Transcribe an image/PDF document and store the text as its content.

        The stored record is replaced only once the model call succeeds.
        """
        document = store.get_document(doc_id)
        if not document.kind.is_binary or not document.base64:
            raise MissingInputError(OCR_PAYLOAD_MISSING)

        text = await self._gateway.perform_ocr(
            document.base64,
            document.ocr_mime_type,
            model=model,
            max_tokens=max_tokens,
        )
        updated = store.update_document(doc_id, {"content": text})
        self._logger.info("document_ocr_stored", doc_id=doc_id, chars=len(text))
        return updated

    async def analyze(
        self,
        store: DocumentStore,
        doc_id: str,
        instruction_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Run the agent-analysis instruction over one document's text."""
        document = store.get_document(doc_id)
        return await self._gateway.analyze_text(
            document.content,
            instruction_prompt=instruction_prompt,
            model=model,
            max_tokens=max_tokens,
        )
