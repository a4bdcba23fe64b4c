"""Google Gemini LLM provider adapter.

Wraps the ``google-genai`` SDK's async surface (``client.aio``) to implement
:class:`ILLMProvider`.  Gemini is the workbench's default backend: it takes
images and PDFs as inline parts, so OCR is a single ``generate_content``
call with the file bytes followed by the prompt.

The client is created on first use rather than in ``__init__`` so the
service starts without a key; a call made without one fails with an
:class:`LLMError` that the gateway turns into its user-facing message.
"""

from __future__ import annotations

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from docbench.config.settings import Settings
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.utils.errors import LLMError
from docbench.utils.logging import get_logger

logger = get_logger(__name__)


class GeminiLLMProvider(ILLMProvider):
    """LLM provider backed by the Gemini API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.gemini_api_key
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            raise LLMError(
                message="Gemini API key is not configured (set GEMINI_API_KEY)",
                provider_name=self.get_provider_name(),
            )
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        parts: list[str],
        *,
        model: str,
        max_tokens: int,
        temperature: float | None = None,
        json_output: bool = False,
    ) -> str:
        config_params: dict = {"max_output_tokens": max_tokens}
        if temperature is not None:
            config_params["temperature"] = temperature
        if json_output:
            config_params["response_mime_type"] = "application/json"

        contents = [types.Part.from_text(text=part) for part in parts]
        return await self._generate(
            model,
            contents,
            types.GenerateContentConfig(**config_params),
            event="gemini_completion",
        )

    async def extract_from_document(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
    ) -> str:
        # Payload first, then the instruction.
        contents = [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            types.Part.from_text(text=prompt),
        ]
        config = types.GenerateContentConfig(max_output_tokens=max_tokens)
        return await self._generate(model, contents, config, event="gemini_document_extract")

    async def _generate(
        self,
        model: str,
        contents: list[types.Part],
        config: types.GenerateContentConfig,
        *,
        event: str,
    ) -> str:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise LLMError(
                message=f"Gemini API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            # Connection and timeout failures from the HTTP transport.
            raise LLMError(
                message=f"Gemini transport error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        usage = response.usage_metadata
        logger.info(
            event,
            model=model,
            tokens=usage.total_token_count if usage else None,
        )
        return response.text or ""

    def supports_vision(self) -> bool:
        return True

    def is_available(self) -> bool:
        """Return ``True`` if a Gemini API key is configured."""
        return bool(self._api_key)

    async def validate_credentials(self) -> bool:
        """List models to confirm the key is accepted, without inference."""
        if not self.is_available():
            return False
        try:
            await self._get_client().aio.models.list()
            return True
        except (genai_errors.APIError, httpx.HTTPError, OSError):
            return False

    def get_provider_name(self) -> str:
        return "gemini"
