"""Request/response façade over the hosted generative model.

Four single-shot call shapes, each one provider request:

  - **OCR** -- inline image/PDF bytes plus the fixed transcription prompt
  - **Structured note** -- instruction + text, JSON output requested
  - **Q&A** -- the combined document text and a question, temperature 0.7
  - **Analysis** -- document text and an instruction, temperature 0.5

Failure policy
--------------
Preconditions (empty text, empty question, missing payload) are checked
locally and raise :class:`MissingInputError` before any network call.
A provider failure (:class:`LLMError`) is logged and re-raised as a
:class:`ModelGatewayError` carrying the message shown to the user.  Nothing
is retried or cached.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
import time
from typing import Any

from docbench.config import prompts
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.models.catalog import ModelCatalog, Operation
from docbench.services.ingestion import strip_data_url_prefix
from docbench.utils.errors import (
    InvalidInputError,
    InvalidResponseFormatError,
    LLMError,
    MissingInputError,
    ModelGatewayError,
)
from docbench.utils.logging import get_logger

# Markdown code fences (```json ... ``` or ``` ... ```) that models wrap
# around JSON output even in JSON mode.  The anchored form must enclose the
# whole reply; the unanchored one finds a fenced block after a preamble.
_WRAPPING_FENCE_RE = re.compile(r"\A```(?:json)?\s*\n?(.*)\n?\s*```\Z", re.DOTALL)
_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)

NO_TEXT_DETECTED = "No text detected."
NO_RESPONSE_GENERATED = "No response generated."
NO_ANALYSIS_GENERATED = "No analysis generated."

OCR_FAILED = "Failed to perform OCR. Please check your API Key and file content."
NOTE_FAILED = "Failed to generate Smart Note."
QNA_FAILED = "Failed to get answer from AI."
ANALYSIS_FAILED = "Failed to analyze text."

NOTE_INPUT_MISSING = "No text provided. Please paste text or upload a file."
QNA_DOCUMENTS_MISSING = (
    "No document content available. Please upload and process documents first."
)
QNA_QUESTION_MISSING = "Please enter a question."
ANALYSIS_INPUT_MISSING = "No text content available. Run OCR first."
OCR_PAYLOAD_MISSING = "No image or PDF payload to process."

QNA_TEMPERATURE = 0.7
ANALYSIS_TEMPERATURE = 0.5


def parse_json_object(raw: str) -> dict[str, Any]:
    """Extract a JSON object from a model reply.

    The reply is parsed as-is first.  Only when that fails are code fences
    and any preamble before the outermost braces stripped.  An empty reply
    parses as ``{}``.

    Raises
    ------
    ValueError
        If the text is not valid JSON or not a JSON object.
    """
    text = raw.strip()
    if not text:
        return {}

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = json.loads(_unwrap_json_text(text))

    if not isinstance(parsed, dict):
        raise ValueError("model reply is not a JSON object")
    return parsed


def _unwrap_json_text(text: str) -> str:
    """Strip a surrounding code fence or prose around the outermost braces."""
    fence_match = _WRAPPING_FENCE_RE.match(text) or _JSON_FENCE_RE.search(text)
    if fence_match:
        text = fence_match.group(1).strip()

    if not text.startswith("{"):
        brace_start = text.find("{")
        brace_end = text.rfind("}")
        if brace_start != -1 and brace_end > brace_start:
            text = text[brace_start : brace_end + 1]
    return text


class ModelGateway:
    """Runs the four model operations against one :class:`ILLMProvider`.

    Model ids and token budgets are optional on every call; missing values
    fall back to the catalog defaults and supplied ones are checked against
    it.
    """

    def __init__(self, llm_provider: ILLMProvider, catalog: ModelCatalog) -> None:
        self._llm = llm_provider
        self._catalog = catalog
        self._logger = get_logger(__name__)

    @property
    def provider_name(self) -> str:
        return self._llm.get_provider_name()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def perform_ocr(
        self,
        payload: str,
        mime_type: str,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Transcribe the text in a base64 image/PDF payload.

        Parameters
        ----------
        payload:
            Base64 file bytes, with or without a ``data:`` URL prefix.
        mime_type:
            ``"application/pdf"`` or an ``image/*`` type.
        model, max_tokens:
            Optional overrides of the catalog defaults for OCR.

        Returns
        -------
        str
            Transcribed text, or ``"No text detected."`` for an empty reply.
        """
        if not payload:
            raise MissingInputError(OCR_PAYLOAD_MISSING)
        try:
            data = base64.b64decode(strip_data_url_prefix(payload), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError("Document payload is not valid base64") from exc
        if not data:
            raise MissingInputError(OCR_PAYLOAD_MISSING)

        model_id, tokens = self._catalog.resolve(Operation.OCR, model, max_tokens)
        text = await self._call(
            Operation.OCR,
            model_id,
            tokens,
            OCR_FAILED,
            self._llm.extract_from_document(
                data, mime_type, prompts.OCR_PROMPT, model=model_id, max_tokens=tokens
            ),
        )
        return text if text.strip() else NO_TEXT_DETECTED

    async def generate_structured_note(
        self,
        text: str,
        instruction_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        """Ask the model for a structured note of *text* as a JSON object.

        Raises
        ------
        MissingInputError
            If *text* is blank.
        InvalidResponseFormatError
            If the reply is not a JSON object.
        ModelGatewayError
            If the provider call fails.
        """
        if not text.strip():
            raise MissingInputError(NOTE_INPUT_MISSING)

        model_id, tokens = self._catalog.resolve(Operation.NOTE, model, max_tokens)
        instruction = instruction_prompt or prompts.STRUCTURED_NOTE_PROMPT
        raw = await self._call(
            Operation.NOTE,
            model_id,
            tokens,
            NOTE_FAILED,
            self._llm.complete(
                [instruction + prompts.NOTE_TEXT_SEPARATOR + text],
                model=model_id,
                max_tokens=tokens,
                json_output=True,
            ),
        )
        try:
            return parse_json_object(raw)
        except ValueError as exc:
            self._logger.error(
                "structured_note_invalid_json",
                model=model_id,
                reply_chars=len(raw),
                error=str(exc),
            )
            raise InvalidResponseFormatError(
                f"{NOTE_FAILED} The model returned an invalid format.",
                provider_name=self.provider_name,
            ) from exc

    async def ask_question(
        self,
        document_text: str,
        question: str,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Answer *question* about *document_text*.

        A provider failure is re-raised with the provider's own message.
        """
        if not document_text.strip():
            raise MissingInputError(QNA_DOCUMENTS_MISSING)
        if not question.strip():
            raise MissingInputError(QNA_QUESTION_MISSING)

        model_id, tokens = self._catalog.resolve(Operation.QNA, model, max_tokens)
        answer = await self._call(
            Operation.QNA,
            model_id,
            tokens,
            None,
            self._llm.complete(
                [
                    prompts.QNA_DOCUMENT_PREFIX + document_text,
                    prompts.QNA_QUESTION_PREFIX + question,
                ],
                model=model_id,
                max_tokens=tokens,
                temperature=QNA_TEMPERATURE,
            ),
        )
        return answer if answer.strip() else NO_RESPONSE_GENERATED

    async def analyze_text(
        self,
        text: str,
        instruction_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Run a free-form instruction over *text* (agent analysis)."""
        if not text.strip():
            raise MissingInputError(ANALYSIS_INPUT_MISSING)

        model_id, tokens = self._catalog.resolve(Operation.ANALYSIS, model, max_tokens)
        instruction = instruction_prompt or prompts.AGENT_ANALYSIS_PROMPT
        result = await self._call(
            Operation.ANALYSIS,
            model_id,
            tokens,
            ANALYSIS_FAILED,
            self._llm.complete(
                [
                    prompts.ANALYSIS_TEXT_PREFIX + text,
                    prompts.ANALYSIS_INSTRUCTION_PREFIX + instruction,
                ],
                model=model_id,
                max_tokens=tokens,
                temperature=ANALYSIS_TEMPERATURE,
            ),
        )
        return result if result.strip() else NO_ANALYSIS_GENERATED

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _call(
        self,
        operation: Operation,
        model: str,
        max_tokens: int,
        failure_message: str | None,
        request: Any,
    ) -> str:
        """Await one provider *request*, logging and translating failures.

        With ``failure_message=None`` the provider's own message is passed
        through (falling back to the Q&A message when it is empty).
        """
        self._logger.info(
            "model_call_start",
            operation=operation.value,
            model=model,
            max_tokens=max_tokens,
            provider=self.provider_name,
        )
        start = time.perf_counter()
        try:
            result = await request
        except LLMError as exc:
            self._logger.error(
                "model_call_failed",
                operation=operation.value,
                model=model,
                max_tokens=max_tokens,
                provider=exc.provider_name or self.provider_name,
                error=str(exc),
            )
            message = failure_message or exc.message or QNA_FAILED
            raise ModelGatewayError(message, provider_name=exc.provider_name) from exc

        self._logger.info(
            "model_call_complete",
            operation=operation.value,
            model=model,
            max_tokens=max_tokens,
            reply_chars=len(result),
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return result
