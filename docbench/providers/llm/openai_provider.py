"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When ``openai_base_url`` is configured (TogetherAI, Groq, Fireworks, ...)
the client points at that URL instead of the default OpenAI endpoint.

Inline payloads use the chat-completions content array: images as an
``image_url`` data URI, PDFs as a ``file`` part carrying a base64 data URI.
"""

from __future__ import annotations

import base64

import openai

from docbench.config.settings import Settings
from docbench.interfaces.llm_provider import ILLMProvider
from docbench.utils.errors import LLMError
from docbench.utils.logging import get_logger

logger = get_logger(__name__)


def _payload_part(data: bytes, mime_type: str) -> dict:
    b64 = base64.b64encode(data).decode("utf-8")
    data_uri = f"data:{mime_type};base64,{b64}"
    if mime_type == "application/pdf":
        return {
            "type": "file",
            "file": {"filename": "document.pdf", "file_data": data_uri},
        }
    return {"type": "image_url", "image_url": {"url": data_uri}}


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat-completions API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        self._base_url = settings.openai_base_url
        self._client: openai.AsyncOpenAI | None = None

        # Custom endpoints may not serve vision models.
        self._has_vision = not settings.openai_base_url
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
        )

    def _get_client(self) -> openai.AsyncOpenAI:
        """Create the SDK client on first use; the SDK rejects an empty key."""
        if not self._api_key:
            raise LLMError(
                message="OpenAI API key is not configured (set OPENAI_API_KEY)",
                provider_name=self.get_provider_name(),
            )
        if self._client is None:
            client_kwargs: dict = {"api_key": self._api_key}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
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
        request: dict = {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": [{"type": "text", "text": part} for part in parts],
                }
            ],
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            request["temperature"] = temperature
        if json_output:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self._get_client().chat.completions.create(**request)
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "openai_completion",
            model=model,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return response.choices[0].message.content or ""

    async def extract_from_document(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
    ) -> str:
        if not self._has_vision:
            raise LLMError(
                message="Vision not supported by this provider configuration",
                provider_name=self.get_provider_name(),
            )
        try:
            response = await self._get_client().chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            _payload_part(data, mime_type),
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
                max_tokens=max_tokens,
            )
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} vision API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "openai_document_extract",
            model=model,
            mime_type=mime_type,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return response.choices[0].message.content or ""

    def supports_vision(self) -> bool:
        return self._has_vision

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)

    async def validate_credentials(self) -> bool:
        """Try listing models to verify the API key works."""
        if not self.is_available():
            return False
        try:
            await self._get_client().models.list()
            return True
        except openai.APIError:
            return False

    def get_provider_name(self) -> str:
        """Return 'openai' or 'openai-compatible' depending on configuration."""
        return self._provider_label
